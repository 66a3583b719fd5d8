"""
Physical constants used by the profile and cosmology calculations.

Both HUBBLE_CONST and SOLAR_METALLICITY are part of the public contract:
downstream physical outputs depend on these exact values.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

# H0 = 100 km s^-1 Mpc^-1 expressed in Gyr^-1
HUBBLE_CONST = 0.102201

# Solar metallicity (Asplund et al. 2009, ARA&A 47, 481)
SOLAR_METALLICITY = 0.0134

# Kennicutt-Schmidt law reference fit (Kennicutt 1998, ApJ 498, 541)
#   Sigma_SFR = A * (Sigma_gas / 1 M_sun pc^-2)^N
KENNICUTT98_SLOPE = 1.4
KENNICUTT98_INTERCEPT = 2.5e-4  # M_sun yr^-1 kpc^-2
KENNICUTT98_RHO_UNIT = 1.0      # M_sun pc^-2

# Minimum number of radial bins (and of surviving data points) for a
# Kennicutt-Schmidt linear fit
KS_MIN_POINTS = 5
