from .diag_third_moments import DiagThirdShocMoments
from .interpolation import InterpolateToInterfaces
from .shoc_state import DiagThirdMomentsState, ThirdMomentState, VerticalGridState
from .third_moment import ClipThirdShocMoment, ComputeDiagThirdShocMoment
from .vertical_grid import ShocVerticalGrid
