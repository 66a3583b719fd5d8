"""
gadgetplotting: binning and aggregation core for GADGET2/3/4 snapshot data.

Turns unstructured particle data (positions, masses, metal masses,
temperatures, stellar ages) into radial profiles, distribution functions
and scaling relations. Snapshot I/O and plotting live elsewhere; every
function here takes and returns plain numeric arrays.
"""
