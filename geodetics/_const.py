"""
Constants declarations for geodetics
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening
WGS84_B = 6356752.314245  # Minor axis (meters)

# UTM
UTM_K0 = 0.9996  # Scale on the central meridian
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING = 10_000_000.0
UTM_MIN_LATITUDE = -80.0
UTM_MAX_LATITUDE = 84.0
UTM_MAX_NORTHING_NORTH = 9_329_006.0
UTM_MIN_NORTHING_SOUTH = 1_116_914.0
UTM_MAX_ITERATIONS = 100

# MGRS; X is repeated for 80-84°N
MGRS_LATITUDE_BANDS = 'CDEFGHJKLMNPQRSTUVWXX'
MGRS_E100K_LETTERS = ('ABCDEFGH', 'JKLMNPQR', 'STUVWXYZ')
MGRS_N100K_LETTERS = ('ABCDEFGHJKLMNPQRSTUV', 'FGHJKLMNPQRSTUVABCDE')
MGRS_PRECISIONS = (2, 4, 6, 8, 10)

# Vincenty
VINCENTY_INVERSE_MAX_ITERATIONS = 1000
VINCENTY_DIRECT_MAX_ITERATIONS = 100
VINCENTY_CONVERGENCE = 1e-12
