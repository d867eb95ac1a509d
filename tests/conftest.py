import numpy as np
import pytest
import xarray as xr

from cfslab import GridVariable, XarraySource


@pytest.fixture
def mooring_ds():
    """Mooring time series: TEMP(time, depth, lat, lon) with 1-D axes."""
    nt, nz = 40, 11
    temp = np.arange(nt * nz, dtype=float).reshape(nt, nz, 1, 1)
    return xr.Dataset(
        {
            'TEMP': (('time', 'depth', 'lat', 'lon'), temp, {'units': 'degC'}),
            'TIME': ('time', np.arange(nt, dtype=float) * 600.0),
            'DEPTH': ('depth', np.arange(nz, dtype=float) * 10.0),
            'LATITUDE': ('lat', np.array([36.75])),
            'LONGITUDE': ('lon', np.array([-122.03])),
            'crs': ((), np.int32(4326)),
            'SALT': ('station', np.arange(7, dtype=float)),
        },
        attrs={'title': 'M1 mooring', 'institution': 'MBARI'},
    )


@pytest.fixture
def mooring(mooring_ds):
    return XarraySource(mooring_ds)


@pytest.fixture
def temp(mooring):
    return GridVariable(mooring, 'TEMP', ['TIME', 'DEPTH', 'LATITUDE', 'LONGITUDE'])


@pytest.fixture
def curvilinear_ds():
    """Curvilinear grid: field(t, y, x) with 2-D lat/lon and a scalar height."""
    nt, ny, nx = 4, 5, 3
    field = np.arange(nt * ny * nx, dtype=float).reshape(nt, ny, nx)
    lat = np.arange(ny * nx, dtype=float).reshape(ny, nx) + 100.0
    lon = np.arange(ny * nx, dtype=float).reshape(ny, nx) + 200.0
    return xr.Dataset(
        {
            'field': (('t', 'y', 'x'), field),
            'time': ('t', np.arange(nt, dtype=float)),
            'lat2d': (('y', 'x'), lat),
            'lon2d': (('y', 'x'), lon),
            'height': ((), 2.0),
            'mask': (('t', 'y', 'x'), field > 10),
            'bad2d': (('y', 'z'), np.zeros((5, 4))),
        }
    )


@pytest.fixture
def curvilinear(curvilinear_ds):
    return XarraySource(curvilinear_ds)


@pytest.fixture
def field(curvilinear):
    return GridVariable(curvilinear, 'field', ['time', 'lat2d', 'lon2d', 'height', 'mask'])
