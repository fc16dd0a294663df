"""
Parameter set, map mode and vector tests
"""

import pytest

from puppet_physics.core import (
    MIN_FREQUENCY, MIN_LENGTH, ParamMapMode, PuppetPhysics, SimplePhysicsProps, Vec2,
)


class TestSimplePhysicsProps:
    """Base values combined with their offsets"""

    def test_defaults_are_identity_offsets(self):
        """Fresh props report their base values"""
        props = SimplePhysicsProps()
        assert props.final_gravity() == 1.0
        assert props.final_length() == 100.0
        assert props.final_frequency() == 1.0
        assert props.final_angle_damping() == 0.5
        assert props.final_length_damping() == 0.5

    def test_damping_is_exact_product(self):
        """Final damping is base times offset, nothing else"""
        props = SimplePhysicsProps(
            angle_damping=0.3, offset_angle_damping=0.7,
            length_damping=0.9, offset_length_damping=0.25,
        )
        assert props.final_angle_damping() == 0.3 * 0.7
        assert props.final_length_damping() == 0.9 * 0.25

    def test_offsets_multiply(self):
        """Offsets scale gravity, length and frequency"""
        props = SimplePhysicsProps(
            gravity=2.0, offset_gravity=0.5,
            length=80.0, offset_length=1.5,
            frequency=3.0, offset_frequency=2.0,
        )
        assert props.final_gravity() == 1.0
        assert props.final_length() == 120.0
        assert props.final_frequency() == 6.0

    @pytest.mark.parametrize("length", [0.0, -5.0])
    def test_length_clamped(self, length):
        """Degenerate lengths clamp to a small positive value"""
        assert SimplePhysicsProps(length=length).final_length() == MIN_LENGTH

    @pytest.mark.parametrize("frequency", [0.0, -1.0])
    def test_frequency_clamped(self, frequency):
        """Degenerate frequencies clamp to a small positive value"""
        assert SimplePhysicsProps(frequency=frequency).final_frequency() == MIN_FREQUENCY

    def test_output_scale_componentwise(self):
        """Output scale and its offset multiply per axis"""
        props = SimplePhysicsProps(output_scale=Vec2(2.0, 3.0), offset_output_scale=Vec2(0.5, -1.0))
        assert props.final_output_scale() == Vec2(1.0, -3.0)

    def test_reset_offsets(self):
        """reset_offsets returns every offset to 1"""
        props = SimplePhysicsProps(offset_length=3.0, offset_output_scale=Vec2(2.0, 2.0))
        props.reset_offsets()
        assert props.final_length() == 100.0
        assert props.final_output_scale() == Vec2(1.0, 1.0)

    def test_dict_round_trip(self):
        """to_dict output rebuilds the same props"""
        props = SimplePhysicsProps(length=42.0, frequency=3.5, output_scale=Vec2(1.0, 0.5))
        data = props.to_dict()
        assert data['output_scale'] == [1.0, 0.5]
        assert SimplePhysicsProps.from_dict(data) == props

    def test_from_dict_ignores_unknown_keys(self):
        """Unknown keys are dropped and ints become floats"""
        props = SimplePhysicsProps.from_dict({'length': 50, 'stiffness': 9, 'output_scale': 2})
        assert props.length == 50.0
        assert isinstance(props.length, float)
        assert props.output_scale == Vec2(2.0, 2.0)


class TestPuppetPhysics:
    """Puppet-wide gravity"""

    def test_default_gravity_scale(self):
        """9.8 m/s^2 at 1000 px/m"""
        assert PuppetPhysics().gravity_scale() == pytest.approx(9800.0)

    def test_custom_scale(self):
        assert PuppetPhysics(pixels_per_meter=100.0, gravity=1.62).gravity_scale() == pytest.approx(162.0)


class TestParamMapMode:
    """Map mode lookup by name"""

    @pytest.mark.parametrize("name,mode", [
        ("xy", ParamMapMode.XY),
        ("XY", ParamMapMode.XY),
        ("angle_length", ParamMapMode.ANGLE_LENGTH),
        ("angle-length", ParamMapMode.ANGLE_LENGTH),
    ])
    def test_from_name(self, name, mode):
        assert ParamMapMode.from_name(name) is mode

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            ParamMapMode.from_name("polar")


class TestVec2:
    """Vector helpers used by the models"""

    def test_from_angle_hangs_down(self):
        """Angle 0 points along +y"""
        v = Vec2.from_angle(0.0, 10.0)
        assert v.x == 0.0
        assert v.y == 10.0

    def test_divide_by_zero(self):
        """Division by zero gives the zero vector"""
        assert Vec2(1.0, 1.0) / 0 == Vec2()

    def test_lerp(self):
        assert Vec2(0.0, 0.0).lerp(Vec2(10.0, -4.0), 0.25) == Vec2(2.5, -1.0)

    def test_is_finite(self):
        assert Vec2(1.0, 2.0).is_finite()
        assert not Vec2(float('nan'), 0.0).is_finite()
        assert not Vec2(0.0, float('inf')).is_finite()

    def test_length(self):
        assert Vec2(3.0, 4.0).length == pytest.approx(5.0)
