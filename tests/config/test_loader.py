"""
Tests for the YAML configuration loader and constants presets.
"""

import dataclasses

import pytest
import yaml

from flowvars.config import (
    ClosureConfig,
    PhysicalConstants,
    StateConfig,
    load_yaml,
    from_dict,
    save_yaml,
    standard_air_preset,
    nondimensional_preset,
)


class TestSchema:

    def test_defaults(self):
        c = PhysicalConstants()
        assert c.gamma == 1.4
        assert c.gas_constant == 287.058
        assert c.sa.cv1 == 7.1
        assert c.sst.sigma_om2 == 0.856
        assert c.sst.cross_diff_floor == 1e-20

    def test_derived_heats(self):
        c = PhysicalConstants()
        assert c.cp - c.cv == pytest.approx(c.gas_constant)
        assert c.cp / c.cv == pytest.approx(c.gamma)

    def test_constants_read_only(self):
        c = PhysicalConstants()
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.gas = None
        with pytest.raises(dataclasses.FrozenInstanceError):
            c.viscosity.mu_ref = 1.0

    def test_nondimensional_preset(self):
        c = nondimensional_preset()
        assert c.gas_constant * c.gamma == pytest.approx(1.0)
        assert c.viscosity.mu_ref == 1.0
        assert c.viscosity.temperature_ref == 1.0

    def test_standard_air(self):
        assert standard_air_preset() == PhysicalConstants()


class TestFromDict:

    def test_empty(self):
        config = from_dict({})
        assert config.constants == PhysicalConstants()
        assert config.state.kind == "euler"

    def test_partial_override(self):
        config = from_dict({'constants': {'gas': {'gamma': 1.3}}, 'state': {'kind': 'rans_sst'}})
        assert config.constants.gamma == 1.3
        assert config.constants.gas_constant == 287.058
        assert config.state.kind == 'rans_sst'

    def test_string_numbers_coerced(self):
        config = from_dict({'constants': {'viscosity': {'mu_ref': '1.8e-5'}},
                            'state': {'n_dim': '3'}})
        assert config.constants.viscosity.mu_ref == 1.8e-5
        assert config.state.n_dim == 3

    def test_int_coerced_to_float(self):
        config = from_dict({'constants': {'gas': {'gas_constant': 287}}})
        assert isinstance(config.constants.gas_constant, float)

    def test_unknown_keys_ignored(self):
        config = from_dict({'constants': {'gas': {'gamma': 1.4, 'colour': 'blue'}}})
        assert config.constants.gamma == 1.4

    def test_preset(self):
        config = from_dict({'preset': 'nondimensional'})
        assert config.constants == nondimensional_preset()

    def test_preset_with_override(self):
        config = from_dict({'preset': 'nondimensional',
                            'constants': {'viscosity': {'prandtl_lam': 0.7}}})
        assert config.constants.viscosity.prandtl_lam == 0.7
        assert config.constants.viscosity.mu_ref == 1.0

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown constants preset"):
            from_dict({'preset': 'helium'})

    def test_invalid_dimension(self):
        with pytest.raises(ValueError, match="n_dim"):
            from_dict({'state': {'n_dim': 4}})


class TestYaml:

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_yaml(tmp_path / "missing.yaml")

    def test_load(self, tmp_path):
        path = tmp_path / "closure.yaml"
        path.write_text(yaml.dump({
            'preset': 'standard-air',
            'constants': {'sst': {'a1': 0.3}},
            'state': {'kind': 'navier_stokes', 'n_dim': 3, 'dual_time': True},
        }))
        config = load_yaml(path)
        assert config.constants.sst.a1 == 0.3
        assert config.state == StateConfig(kind='navier_stokes', n_dim=3, dual_time=True)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml(path) == ClosureConfig()

    def test_save_and_reload(self, tmp_path):
        config = ClosureConfig(constants=nondimensional_preset(),
                               state=StateConfig(kind='rans_sa', n_dim=2))
        path = tmp_path / "sub" / "closure.yaml"
        save_yaml(config, path)
        assert load_yaml(path) == config
