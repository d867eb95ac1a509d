import numpy as np
import pytest
import xarray as xr

import cfslab
from cfslab import GridVariable, InvalidSourceError, UnknownVariableError, XarraySource
from cfslab.main import as_source


def test_open_variable_from_dataset(mooring_ds):
    v = cfslab.open_variable(mooring_ds, 'TEMP', ['TIME', 'DEPTH'])
    assert isinstance(v, GridVariable)
    assert isinstance(v.source, XarraySource)
    assert v.axes == ('TIME', 'DEPTH')
    np.testing.assert_array_equal(v.grid([1, 1, 1, 1], [3, 1, 1, 1])['TIME'], [0.0, 600.0, 1200.0])


def test_open_variable_without_axes(mooring):
    v = cfslab.open_variable(mooring, 'TEMP')
    assert v.axes == ()
    assert v.grid() == {}


def test_open_variable_from_path(tmp_path, mooring_ds):
    pytest.importorskip('scipy')
    path = tmp_path / 'mooring.nc'
    mooring_ds.to_netcdf(path, engine='scipy')

    axes = ['TIME', 'DEPTH', 'LATITUDE', 'LONGITUDE']
    with cfslab.open_variable(str(path), 'TEMP', axes, engine='scipy') as v:
        assert v.shape == (40, 11, 1, 1)
        np.testing.assert_array_equal(v.mdata('end', 1), mooring_ds['TEMP'].values[-1:, :1])


def test_as_source(mooring):
    assert as_source(mooring) is mooring


def test_invalid_source():
    with pytest.raises(InvalidSourceError) as info:
        cfslab.open_variable(42, 'TEMP')
    assert 'Invalid dataset' in str(info.value)


def test_unknown_variable(mooring_ds):
    with pytest.raises(UnknownVariableError):
        cfslab.open_variable(mooring_ds, 'PSAL')


def test_closing_variable_closes_owned_dataset(mooring_ds, monkeypatch):
    closed = []
    monkeypatch.setattr(xr.Dataset, 'close', lambda self: closed.append(self))

    with GridVariable(XarraySource(mooring_ds, owns_dataset=True), 'DEPTH') as v:
        v.data(3)
    assert len(closed) == 1 and closed[0] is mooring_ds


def test_closing_variable_keeps_wrapped_dataset(mooring_ds):
    with cfslab.open_variable(mooring_ds, 'DEPTH') as v:
        v.data()
    np.testing.assert_array_equal(mooring_ds['DEPTH'].values, np.arange(11) * 10.0)
