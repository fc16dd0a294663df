"""
Model dispatch, output mapping and driver tests
"""

import math

import numpy as np
import pytest

from puppet_physics.core import (
    ParamMapMode, PuppetPhysics, SimplePhysics, SimplePhysicsProps, SimplePhysicsSystem,
    SimulationSettings, SystemKind, Vec2, generate_path, get_system_kind, map_output,
    record_trace,
)
from puppet_physics.pendulum import RigidPendulumSystem, SpringPendulumSystem


DT = 1.0 / 60.0
GRAVITY_SCALE = PuppetPhysics().gravity_scale()


class TestSystemDispatch:
    """The closed set of physics models"""

    def test_exactly_two_kinds(self):
        assert {kind.value for kind in SystemKind} == {"rigid_pendulum", "spring_pendulum"}

    @pytest.mark.parametrize("kind", list(SystemKind))
    def test_every_kind_ticks(self, kind):
        """Each kind builds a model that returns a finite bob"""
        system = SimplePhysicsSystem.from_kind(kind)
        assert system.kind is kind
        bob = system.tick(Vec2(), SimplePhysicsProps(), DT, GRAVITY_SCALE)
        assert isinstance(bob, Vec2)
        assert bob.is_finite()
        assert bob.to_tuple() == pytest.approx((0.0, 100.0))

    def test_constructors(self):
        assert isinstance(SimplePhysicsSystem.new_rigid_pendulum().model, RigidPendulumSystem)
        assert isinstance(SimplePhysicsSystem.new_spring_pendulum().model, SpringPendulumSystem)

    def test_mismatched_model_rejected(self):
        with pytest.raises(TypeError):
            SimplePhysicsSystem(SystemKind.RIGID_PENDULUM, SpringPendulumSystem())

    @pytest.mark.parametrize("name,kind", [
        ("rigid_pendulum", SystemKind.RIGID_PENDULUM),
        ("Pendulum", SystemKind.RIGID_PENDULUM),
        ("spring-pendulum", SystemKind.SPRING_PENDULUM),
        ("springy", SystemKind.SPRING_PENDULUM),
    ])
    def test_names(self, name, kind):
        assert get_system_kind(name) is kind

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            get_system_kind("ragdoll")


class TestMapOutput:
    """Bob position to parameter value"""

    def setup_method(self):
        self.props = SimplePhysicsProps(length=100.0)
        self.anchor = Vec2(10.0, -5.0)

    def test_rest_pose(self):
        """Hanging straight down maps to (0, 0) in XY and (0, 1) in AngleLength"""
        bob = self.anchor + Vec2(0.0, 100.0)
        xy = map_output(bob, self.anchor, self.props, ParamMapMode.XY)
        al = map_output(bob, self.anchor, self.props, ParamMapMode.ANGLE_LENGTH)
        assert xy.to_tuple() == pytest.approx((0.0, 0.0))
        assert al.to_tuple() == pytest.approx((0.0, 1.0))

    def test_xy_mode(self):
        bob = self.anchor + Vec2.from_angle(0.3, 100.0)
        value = map_output(bob, self.anchor, self.props, ParamMapMode.XY)
        assert value.x == pytest.approx(math.sin(0.3))
        assert value.y == pytest.approx(1.0 - math.cos(0.3))

    def test_angle_length_mode(self):
        bob = self.anchor + Vec2.from_angle(0.3, 100.0)
        value = map_output(bob, self.anchor, self.props, ParamMapMode.ANGLE_LENGTH)
        assert value.x == pytest.approx(0.3 / math.pi)
        assert value.y == pytest.approx(1.0)

    def test_stretch_shows_in_length(self):
        """A spring stretched to twice its length reads 2"""
        bob = self.anchor + Vec2(0.0, 200.0)
        value = map_output(bob, self.anchor, self.props, ParamMapMode.ANGLE_LENGTH)
        assert value.y == pytest.approx(2.0)

    def test_output_scale(self):
        props = SimplePhysicsProps(length=100.0, output_scale=Vec2(2.0, -1.0))
        bob = self.anchor + Vec2.from_angle(0.3, 100.0)
        value = map_output(bob, self.anchor, props, ParamMapMode.XY)
        assert value.x == pytest.approx(2.0 * math.sin(0.3))
        assert value.y == pytest.approx(-(1.0 - math.cos(0.3)))


class TestSimplePhysicsDriver:
    """Per-frame driver update"""

    def make_driver(self, **kwargs):
        return SimplePhysics(
            param="hair",
            system=SimplePhysicsSystem.new_rigid_pendulum(),
            props=SimplePhysicsProps(length=100.0),
            **kwargs,
        )

    def test_first_update_at_rest(self):
        driver = self.make_driver()
        output = driver.update(DT, Vec2(20.0, 30.0), GRAVITY_SCALE)
        assert output.to_tuple() == pytest.approx((0.0, 1.0))
        assert driver.anchor == Vec2(20.0, 30.0)

    def test_output_before_update(self):
        assert self.make_driver().calc_output() == Vec2()

    def test_non_finite_anchor_holds_output(self):
        driver = self.make_driver()
        driver.update(DT, Vec2(), GRAVITY_SCALE)
        driver.update(DT, Vec2(5.0, 0.0), GRAVITY_SCALE)
        held = driver.output
        assert driver.update(DT, Vec2(float('nan'), 0.0), GRAVITY_SCALE) == held
        assert driver.anchor == Vec2(5.0, 0.0)

    @pytest.mark.parametrize("dt", [0.0, -DT, float('nan'), float('inf')])
    def test_bad_dt_holds_output(self, dt):
        driver = self.make_driver()
        driver.update(DT, Vec2(), GRAVITY_SCALE)
        driver.update(DT, Vec2(5.0, 0.0), GRAVITY_SCALE)
        held = driver.output
        angle = driver.system.model.angle
        assert driver.update(dt, Vec2(9.0, 0.0), GRAVITY_SCALE) == held
        assert driver.system.model.angle == angle

    def test_substeps_interpolate_anchor(self):
        """A long frame equals several short ticks along the anchor's path"""
        settings = SimulationSettings(max_substep=0.125)
        driver = self.make_driver()
        driver.update(0.5, Vec2(), GRAVITY_SCALE, settings)
        driver.update(0.5, Vec2(20.0, 0.0), GRAVITY_SCALE, settings)

        manual = SimplePhysicsSystem.new_rigid_pendulum()
        for _ in range(4):
            manual.tick(Vec2(), driver.props, 0.125, GRAVITY_SCALE)
        for i in range(4):
            bob = manual.tick(Vec2().lerp(Vec2(20.0, 0.0), (i + 1) / 4), driver.props, 0.125, GRAVITY_SCALE)

        assert driver.bob == bob
        assert driver.system.model.angle == manual.model.angle

    def test_long_frame_stays_finite(self):
        """A multi-second hitch is clamped and substepped"""
        driver = self.make_driver()
        driver.update(DT, Vec2(), GRAVITY_SCALE)
        output = driver.update(60.0, Vec2(300.0, 0.0), GRAVITY_SCALE)
        assert output.is_finite()

    def test_map_mode_changes_output_only(self):
        """Switching the mapping mode re-reads the same simulated state"""
        driver = self.make_driver()
        driver.update(DT, Vec2(), GRAVITY_SCALE)
        driver.update(DT, Vec2(8.0, 0.0), GRAVITY_SCALE)
        bob = driver.bob
        angle_length = driver.calc_output()

        driver.map_mode = ParamMapMode.XY
        xy = driver.calc_output()

        assert driver.bob == bob
        assert xy != angle_length
        local = (bob - driver.anchor) / 100.0
        assert xy.x == pytest.approx(local.x)
        assert xy.y == pytest.approx(1.0 - local.y)

    def test_reset(self):
        driver = self.make_driver()
        driver.update(DT, Vec2(), GRAVITY_SCALE)
        driver.update(DT, Vec2(50.0, 0.0), GRAVITY_SCALE)
        driver.reset()
        assert driver.anchor is None
        assert driver.output == Vec2()
        assert driver.system.model.angle == 0.0

    def test_deterministic(self):
        """Identical inputs give bit-identical outputs"""
        anchors = generate_path("shake", 120, seed=7)

        def run():
            driver = SimplePhysics(
                param="tuft",
                system=SimplePhysicsSystem.new_spring_pendulum(),
                map_mode=ParamMapMode.XY,
                props=SimplePhysicsProps(length=40.0, frequency=4.0),
            )
            return record_trace(driver, anchors, DT, GRAVITY_SCALE).outputs

        assert np.array_equal(run(), run())


class TestSimulationSettings:
    """Timestep policy"""

    def test_substeps(self):
        settings = SimulationSettings(max_substep=0.125, max_substeps=8)
        assert settings.substeps(0.01) == 1
        assert settings.substeps(0.125) == 1
        assert settings.substeps(0.5) == 4
        assert settings.substeps(5.0) == 8

    def test_clamp_dt(self):
        settings = SimulationSettings(max_dt=0.25)
        assert settings.clamp_dt(0.1) == 0.1
        assert settings.clamp_dt(3.0) == 0.25

    @pytest.mark.parametrize("kwargs", [
        {"max_dt": 0.0},
        {"max_substep": -1.0},
        {"max_substep": float('inf')},
        {"max_substeps": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            SimulationSettings(**kwargs)
