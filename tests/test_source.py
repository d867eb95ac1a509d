import numpy as np
import pytest
import xarray as xr

from cfslab import (
    OutOfBoundsError, ParameterError, RankMismatchError, UnknownVariableError, XarraySource
)


def test_shape_of(mooring):
    assert mooring.shape_of('TEMP') == (40, 11, 1, 1)
    assert mooring.shape_of('DEPTH') == (11,)
    assert mooring.shape_of('crs') == ()


def test_unknown_variable(mooring):
    with pytest.raises(UnknownVariableError) as info:
        mooring.shape_of('PSAL')
    assert info.value.variable == 'PSAL'
    assert 'TEMP' in info.value.available_variables
    with pytest.raises(UnknownVariableError):
        mooring.read_all('PSAL')
    assert mooring.has_variable('TEMP')
    assert not mooring.has_variable('PSAL')


def test_read_all(mooring, mooring_ds):
    values = mooring.read_all('TEMP')
    assert isinstance(values, np.ndarray)
    np.testing.assert_array_equal(values, mooring_ds['TEMP'].values)


def test_read_slice_keeps_dimensions(mooring, mooring_ds):
    values = mooring.read_slice('TEMP', (3, 5, 1, 1), (3, 5, 1, 1), (1, 1, 1, 1))
    assert values.shape == (1, 1, 1, 1)
    assert values[0, 0, 0, 0] == mooring_ds['TEMP'].values[2, 4, 0, 0]


def test_read_slice_strided(mooring, mooring_ds):
    values = mooring.read_slice('DEPTH', (2,), (11,), (3,))
    np.testing.assert_array_equal(values, mooring_ds['DEPTH'].values[1::3])


def test_read_slice_out_of_bounds(mooring):
    with pytest.raises(OutOfBoundsError) as info:
        mooring.read_slice('DEPTH', (1,), (12,), (1,))
    assert info.value.dimension == 0
    assert info.value.extent == 11
    with pytest.raises(OutOfBoundsError):
        mooring.read_slice('DEPTH', (0,), (5,), (1,))
    with pytest.raises(RankMismatchError):
        mooring.read_slice('DEPTH', (1, 1), (5, 1), (1, 1))


@pytest.mark.parametrize("stride", [0, -2])
def test_read_slice_rejects_non_positive_stride(mooring, stride):
    with pytest.raises(ParameterError) as info:
        mooring.read_slice('TEMP', (1, 1, 1, 1), (5, 5, 1, 1), (1, stride, 1, 1))
    assert info.value.variable == 'TEMP'
    assert info.value.dimension == 1


def test_attributes(mooring):
    assert mooring.attributes('TEMP') == {'units': 'degC'}
    assert mooring.global_attributes()['institution'] == 'MBARI'


def test_from_path(tmp_path, mooring_ds):
    pytest.importorskip('scipy')
    path = tmp_path / 'mooring.nc'
    mooring_ds.to_netcdf(path, engine='scipy')

    with XarraySource.from_path(path, engine='scipy') as source:
        assert source.shape_of('TEMP') == (40, 11, 1, 1)
        np.testing.assert_array_equal(
            source.read_slice('TIME', (1,), (3,), (1,)),
            mooring_ds['TIME'].values[:3]
        )


def test_close_only_owned(mooring_ds):
    source = XarraySource(mooring_ds)
    source.close()
    # Wrapped dataset stays usable
    assert mooring_ds['TEMP'].shape == (40, 11, 1, 1)
    assert isinstance(source.dataset, xr.Dataset)
