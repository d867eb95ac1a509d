"""
Example: Hyperslabs and Coordinate Grids with CFSlab

This example builds a small in-memory mooring dataset and shows how to read
all or part of a variable together with the matching coordinate values.
"""

import numpy as np
import xarray as xr

import cfslab

# ============================================================================
# Build a Dataset
# ============================================================================

nt, nz = 48, 11
ds = xr.Dataset(
    {
        'TEMP': (('time', 'depth', 'lat', 'lon'),
                 15.0 - np.arange(nt * nz).reshape(nt, nz, 1, 1) / 100.0,
                 {'units': 'degC'}),
        'TIME': ('time', np.arange(nt) * 600.0),
        'DEPTH': ('depth', np.arange(nz) * 10.0),
        'LATITUDE': ('lat', [36.75]),
        'LONGITUDE': ('lon', [-122.03]),
    },
    attrs={'title': 'Example mooring'},
)

v = cfslab.open_variable(ds, 'TEMP', axes=['TIME', 'DEPTH', 'LATITUDE', 'LONGITUDE'])

# ============================================================================
# Example 1: Shape and Alignment
# ============================================================================

print("="*70)
print("Example 1: Shape and Axis Alignment")
print("="*70)

print(cfslab.describe_alignment(v))
print(f"units: {v.attribute('units')}, title: {v.attribute('title')}")

# ============================================================================
# Example 2: Explicit Hyperslab
# ============================================================================

print("\n" + "="*70)
print("Example 2: first/last/stride Hyperslab")
print("="*70)

first, last, stride = [1, 1, 1, 1], [v.end(1), 5, 1, 1], [12, 2, 1, 1]
temp = v.data(first, last, stride)
grid = v.grid(first, last, stride)
print(f"TEMP {temp.shape}")
for name, values in grid.items():
    print(f"  {name}: {values}")

# ============================================================================
# Example 3: Index Expressions
# ============================================================================

print("\n" + "="*70)
print("Example 3: Index Expressions")
print("="*70)

print("last three times, depths 3, 5, 7:")
print(v.mdata("end-2:end", "3:2:7").squeeze())
print("last value:", v.mdata(-1, cfslab.END).item())
