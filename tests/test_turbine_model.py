"""Tests for the actuator disk turbine."""
import numpy as np
import pytest

from actuator_disk_model import fields_class, input_class, turbine_model_class
from actuator_disk_model.wind_farm_utils import disk_stencil, nearest_index


def make_turbine(grid, fields, params, x=500., y=500., **kwargs):
    turbine = turbine_model_class(grid, fields, x=x, y=y, **params, **kwargs)
    turbine.create()
    return turbine


class TestConstruction:
    def test_initial_state(self, grid, fields, turbine_params):
        t = turbine_model_class(grid, fields, x=500., y=400., start_time=30., **turbine_params)
        assert t.area == pytest.approx(np.pi * 100.**2 / 4)
        assert t.yaw == 0.
        assert t.next_yaw == 30.
        assert t.get_power() == 0.
        assert t.location == (500., 400., 95.)

    @pytest.mark.parametrize("override, expected", [(None, 95.), (-1., 95.), (0., 95.), (120., 120.)])
    def test_hub_height_override(self, grid, fields, turbine_params, override, expected):
        t = turbine_model_class(grid, fields, hhub_override=override, **turbine_params)
        assert t.hhub == expected

    def test_coefficients_required(self, grid, fields):
        with pytest.raises(ValueError):
            turbine_model_class(grid, fields, D=100., hhub=90., Cp=0.45, tsr=8.)

    @pytest.mark.parametrize("key", ["D", "hhub", "Ct", "Cp", "tsr"])
    def test_physical_parameters_required(self, grid, fields, turbine_params, key):
        params = dict(turbine_params)
        del params[key]
        with pytest.raises(ValueError, match=key):
            turbine_model_class(grid, fields, **params)

    def test_from_input(self, grid, fields):
        inp = input_class(items={'turbine': {'diam': 80, 'hhub': 70, 'ct': 0.8,
                                             'cp': 0.4, 'tsr': 7, 'turbstarttime': 12}})
        t = turbine_model_class.from_input(inp, grid, fields, 300., 200., hhub_override=-1)
        assert t.D == 80.
        assert t.hhub == 70.
        assert t.start_time == 12.
        assert t.location == (300., 200., 70.)

    def test_from_input_missing_item(self, grid, fields):
        inp = input_class(items={'turbine': {'diam': 80, 'hhub': 70, 'ct': 0.8, 'tsr': 7}})
        with pytest.raises(KeyError, match="cp"):
            turbine_model_class.from_input(inp, grid, fields, 300., 200.)


class TestCreate:
    def test_hub_level_exact(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        assert grid.z[t.k_hub] == pytest.approx(95.)
        assert abs(grid.z[t.k_hub] - t.hhub) == 0.

    def test_hub_level_tie_picks_lowest(self, grid, fields, turbine_params):
        params = dict(turbine_params, hhub=90.)
        t = make_turbine(grid, fields, params)
        assert grid.z[t.k_hub] == pytest.approx(85.)

    def test_hub_level_stays_in_interior(self, grid, fields, turbine_params):
        params = dict(turbine_params, hhub=1000.)
        t = make_turbine(grid, fields, params)
        assert t.k_hub == grid.kend - 1

    def test_weights_sum_to_one(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        assert t.n_cells == 16
        assert np.all(t.weights >= 0)
        assert t.weights.sum() == pytest.approx(1.)

    def test_weights_gaussian(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        # Inner cells are (10, 10) and outer cells (30, 30) from the centre,
        # the filter width is 1.5 dx = 30 m
        ratio = np.exp(-6. * 200. / 30.**2) / np.exp(-6. * 1800. / 30.**2)
        assert t.weights.max() / t.weights.min() == pytest.approx(ratio)

    def test_stencil_on_hub_level(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        k = t.indices // grid.kstride
        assert np.all(k == t.k_hub)

    def test_rotor_edge_is_included(self, grid, fields, turbine_params):
        # A cell centre lies exactly one radius from the rotor centre
        t = make_turbine(grid, fields, turbine_params, x=510.)
        i = nearest_index(grid.x, 510., grid.istart, grid.iend)
        j = nearest_index(grid.y, 550., grid.jstart, grid.jend)
        assert grid.index(i, j, t.k_hub) in t.indices

    def test_degenerate_disk(self, grid, fields, turbine_params):
        # Rotor between cell centres
        params = dict(turbine_params, D=1.)
        t = make_turbine(grid, fields, params, x=500., y=500.)
        assert t.n_cells == 0
        u0 = fields.mp['u'].copy()
        t.exec(None, 0.)
        assert t.get_power() == 0.
        assert t.get_thrust() == 0.
        np.testing.assert_array_equal(fields.mp['u'], u0)

    def test_create_again_gives_same_stencil(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        idx, w = t.indices.copy(), t.weights.copy()
        t.create()
        np.testing.assert_array_equal(t.indices, idx)
        np.testing.assert_array_equal(t.weights, w)


class TestDiskStencil:
    def test_order_and_membership(self, grid):
        idx, w = disk_stencil(grid.x, grid.y, grid.istart, grid.iend, grid.jstart, grid.jend,
                              grid.jstride, grid.kstride, 3, 500., 500., 50., 30.)
        # j outer, i inner
        assert np.all(np.diff(idx) > 0)
        assert len(idx) == len(w) == 16
        assert np.all(w > 0)

    def test_nearest_index_first_minimum(self):
        arr = np.array([0., 10., 20., 30.])
        assert nearest_index(arr, 15., 0, 4) == 1
        assert nearest_index(arr, 15., 2, 4) == 2
        assert nearest_index(arr, 100., 0, 4) == 3


class TestExec:
    def test_before_start_time(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params, start_time=10.)
        u0 = fields.mp['u'].copy()
        t.exec(None, 9.99)
        assert t.get_power() == 0.
        np.testing.assert_array_equal(fields.mp['u'], u0)
        t.exec(None, 10.)
        assert t.get_power() > 0.

    def test_thrust_and_power(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        t.exec(None, 0.)
        assert t.Uh == pytest.approx(8.)
        assert t.get_thrust() == pytest.approx(0.5 * 0.75 * 64.)
        assert t.get_power() == pytest.approx(0.45 * 0.5 * 8.**3 * np.pi * 100.**2 / 4)

    def test_zero_velocity(self, grid, fields, turbine_params):
        fields.set_uniform(u=0.)
        t = make_turbine(grid, fields, turbine_params)
        t.exec(None, 0.)
        assert t.get_power() == 0.
        assert t.get_thrust() == 0.

    def test_reversed_flow_keeps_sign(self, grid, fields, turbine_params):
        fields.set_uniform(u=-8.)
        t = make_turbine(grid, fields, turbine_params)
        t.exec(None, 0.)
        assert t.get_thrust() == pytest.approx(-0.5 * 0.75 * 64.)
        assert t.get_power() < 0.
        # The forcing opposes the reversed flow
        assert fields.mp['u'][t.indices].max() > -8.

    @pytest.mark.parametrize("yaw", [0., 0.3, -1.2])
    def test_momentum_conservation(self, grid, fields, turbine_params, yaw):
        fields.set_uniform(u=8., v=2.)
        t = make_turbine(grid, fields, turbine_params)
        t.yaw = yaw
        u0 = fields.mp['u'].copy()
        v0 = fields.mp['v'].copy()
        t.exec(None, 0.)

        T = t.get_thrust()
        assert T == pytest.approx(0.5 * 0.75 * t.Uh * abs(t.Uh))
        assert t.Uh == pytest.approx(8. * np.cos(yaw) + 2. * np.sin(yaw))
        assert (fields.mp['u'] - u0).sum() == pytest.approx(-T * np.cos(yaw))
        assert (fields.mp['v'] - v0).sum() == pytest.approx(-T * np.sin(yaw), abs=1e-12)

    def test_forcing_only_on_stencil(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        u0 = fields.mp['u'].copy()
        t.exec(None, 0.)
        changed = np.nonzero(fields.mp['u'] != u0)[0]
        np.testing.assert_array_equal(np.sort(changed), np.sort(t.indices))

    def test_single_precision_field(self, grid, turbine_params):
        fields = fields_class(grid, dtype=np.float32)
        fields.set_uniform(u=8.)
        t = make_turbine(grid, fields, turbine_params)
        u0 = fields.mp['u'].astype(np.float64)
        t.exec(None, 0.)
        assert fields.mp['u'].dtype == np.float32
        du = fields.mp['u'].astype(np.float64) - u0
        assert du.sum() == pytest.approx(-t.get_thrust(), rel=1e-5)


class TestDynamicYaw:
    def yawing_turbine(self, grid, fields, params, **kwargs):
        fields.set_uniform(u=5., v=5.)
        return make_turbine(grid, fields, params, dyn_yaw=True, yaw_period=10., **kwargs)

    def test_contraction_toward_wind(self, grid, fields, turbine_params):
        t = self.yawing_turbine(grid, fields, turbine_params)
        target = np.pi / 4

        t.exec(None, 0.)
        yaw1 = t.yaw
        assert abs(yaw1 - target) == pytest.approx(0.8 * target)
        assert t.next_yaw == 10.

        # Not due yet
        t.exec(None, 5.)
        assert t.yaw == yaw1

        t.exec(None, 10.)
        assert abs(t.yaw - target) == pytest.approx(0.8 * abs(yaw1 - target))
        assert t.next_yaw == 20.

    def test_contraction_from_any_yaw(self, grid, fields, turbine_params):
        t = self.yawing_turbine(grid, fields, turbine_params)
        t.yaw = 1.5
        t.exec(None, 0.)
        assert abs(t.yaw - np.pi / 4) == pytest.approx(0.8 * abs(1.5 - np.pi / 4))

    def test_samples_upstream(self, grid, fields, turbine_params):
        t = self.yawing_turbine(grid, fields, turbine_params)
        # Only the cell one diameter upstream sees a crosswind
        fields.set_uniform(u=8., v=0.)
        i = nearest_index(grid.x, 400., grid.istart, grid.iend)
        j = nearest_index(grid.y, 500., grid.jstart, grid.jend)
        fields.mp['v'][grid.index(i, j, t.k_hub)] = 8.
        t.exec(None, 0.)
        assert t.yaw == pytest.approx(0.2 * np.pi / 4)

    def test_no_yaw_without_switch(self, grid, fields, turbine_params):
        fields.set_uniform(u=5., v=5.)
        t = make_turbine(grid, fields, turbine_params)
        t.exec(None, 0.)
        assert t.yaw == 0.

    def test_yaw_waits_for_start_time(self, grid, fields, turbine_params):
        t = self.yawing_turbine(grid, fields, turbine_params, start_time=20.)
        t.exec(None, 15.)
        assert t.yaw == 0.
        t.exec(None, 20.)
        assert t.yaw != 0.


class TestStatistics:
    def test_history_every_period(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params, turb_stats=True, stats_period=2.)
        for time in range(6):
            t.exec(None, float(time))
        assert t.time == [0., 2., 4.]
        assert len(t.pwr_time) == len(t.Uh_time) == len(t.yaw_time) == 3

    def test_history_every_step(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params, turb_stats=True)
        for time in range(3):
            t.exec(None, float(time))
        assert t.time == [0., 1., 2.]

    def test_no_history_by_default(self, grid, fields, turbine_params):
        t = make_turbine(grid, fields, turbine_params)
        t.exec(None, 0.)
        assert t.time == []
