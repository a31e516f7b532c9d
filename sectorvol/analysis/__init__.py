from .alignment import right_align, right_align_padded, right_align_all
from .volatility import (
    rolling_volatility, parkinson_volatility, volatility_ratio,
    compute_sector_volatility, compute_all_sector_volatility,
)
from .cross_sector import pearson_correlation, compute_correlation_matrix, average_cross_correlation
from .bond_spreads import compute_term_spreads, detect_inversions, yield_curve_for_date
