"""Unit tests for weight schedules, streaming moments and normalization."""

import numpy as np
import pytest

from online_estimation.exceptions import ConfigurationError
from online_estimation.stats import (
    EqualWeight,
    ExponentialWeight,
    BoundedEqualWeight,
    LearningRate,
    LearningRate2,
    HarmonicWeight,
    McclainWeight,
    ConstantWeight,
    make_weight,
    weight_curve,
    StreamingMoment,
    Normalizer,
    if0then1,
)


ALL_SCHEDULES = [
    EqualWeight(),
    ExponentialWeight(0.1),
    ExponentialWeight(1.0),
    BoundedEqualWeight(0.05),
    LearningRate(0.6),
    LearningRate(1.0, lam=0.2),
    LearningRate2(0.5),
    HarmonicWeight(10.0),
    McclainWeight(0.1),
    ConstantWeight(0.1),
]


# ============================================================================
# Tests for weight schedules
# ============================================================================


class TestWeightSchedules:
    """Tests for WeightSchedule variants."""

    @pytest.mark.parametrize("schedule", ALL_SCHEDULES, ids=lambda s: s.name)
    def test_weights_in_unit_interval(self, schedule):
        """Every weight lies in (0, 1] and each call advances one step."""
        w = schedule.fresh_copy()
        for t in range(1, 201):
            value = w.next()
            assert 0.0 < value <= 1.0
            assert w.steps_seen == t

    def test_equal_weight(self):
        """Equal weighting gives 1/t."""
        w = EqualWeight()
        assert [w.next() for _ in range(4)] == pytest.approx([1.0, 0.5, 1 / 3, 0.25])

    def test_exponential_weight_floor(self):
        """Exponential weighting stops decaying at lambda."""
        w = ExponentialWeight(0.1)
        values = [w.next() for _ in range(15)]
        assert values[0] == 1.0
        assert values[9] == pytest.approx(0.1)
        assert values[14] == pytest.approx(0.1)

    def test_learning_rate(self):
        """Learning rate decays as t^-r."""
        w = LearningRate(0.5)
        assert w.weight(4) == pytest.approx(0.5)
        assert LearningRate(0.5, lam=0.6).weight(4) == pytest.approx(0.6)

    def test_learning_rate2_and_harmonic(self):
        """Closed forms of LearningRate2 and HarmonicWeight."""
        assert LearningRate2(0.5).weight(3) == pytest.approx(0.5)
        assert HarmonicWeight(2.0).weight(3) == pytest.approx(0.5)

    def test_mcclain_recursion(self):
        """McClain weights follow the recursion and match weight(t)."""
        w = McclainWeight(0.1)
        values = [w.next() for _ in range(3)]
        assert values[0] == 1.0
        assert values[1] == pytest.approx(1.0 / 1.9)
        assert values[2] == pytest.approx(values[1] / (1.0 + values[1] - 0.1))
        assert w.weight(3) == pytest.approx(values[2])

    def test_mcclain_tends_to_alpha(self):
        """McClain weights approach alpha from above."""
        w = McclainWeight(0.2)
        for _ in range(500):
            value = w.next()
        assert value == pytest.approx(0.2, abs=1e-3)
        assert value >= 0.2

    def test_constant_weight(self):
        """Constant weight returns eta every step."""
        w = ConstantWeight(0.25)
        assert [w.next() for _ in range(3)] == [0.25, 0.25, 0.25]

    def test_reset(self):
        """Reset restarts the schedule."""
        w = McclainWeight(0.1)
        first = [w.next() for _ in range(5)]
        w.reset()
        assert w.steps_seen == 0
        assert [w.next() for _ in range(5)] == first

    @pytest.mark.parametrize(
        "factory",
        [
            lambda: ExponentialWeight(0.0),
            lambda: ExponentialWeight(1.5),
            lambda: LearningRate(0.0),
            lambda: LearningRate2(-1.0),
            lambda: HarmonicWeight(0.0),
            lambda: McclainWeight(1.0),
            lambda: ConstantWeight(0.0),
            lambda: ConstantWeight(2.0),
        ],
    )
    def test_invalid_parameters(self, factory):
        """Out-of-range decay parameters are rejected."""
        with pytest.raises(ConfigurationError):
            factory()

    def test_make_weight(self):
        """Schedules can be created by name."""
        w = make_weight("exponential", 0.2)
        assert isinstance(w, ExponentialWeight)
        assert w.lam == 0.2
        assert isinstance(make_weight("equal"), EqualWeight)
        assert isinstance(make_weight("mcclain"), McclainWeight)

    def test_make_weight_unknown(self):
        """Unknown schedule names are rejected."""
        with pytest.raises(ConfigurationError, match="Unknown weight schedule"):
            make_weight("nope")

    def test_weight_curve_does_not_advance(self):
        """weight_curve samples a copy of the schedule."""
        w = EqualWeight()
        w.next()
        curve = weight_curve(w, 3)
        np.testing.assert_allclose(curve, [1.0, 0.5, 1 / 3])
        assert w.steps_seen == 1


# ============================================================================
# Tests for StreamingMoment
# ============================================================================


class TestStreamingMoment:
    """Tests for the streaming mean/variance."""

    def test_single_observation(self):
        """One value: mean is the value, variance is exactly zero."""
        m = StreamingMoment()
        m.update(3.5)
        assert m.mean() == 3.5
        assert m.variance() == 0.0
        assert m.n == 1

    def test_equal_weight_matches_numpy(self, rng):
        """Equal weighting gives the population mean and variance."""
        data = rng.normal(2.0, 3.0, 500)
        m = StreamingMoment(EqualWeight())
        for value in data:
            m.update(value)
        assert m.mean() == pytest.approx(np.mean(data))
        assert m.variance() == pytest.approx(np.var(data))
        assert m.std() == pytest.approx(np.std(data))

    def test_exponential_weight_by_hand(self):
        """Exponentially weighted statistics for a short sequence."""
        m = StreamingMoment(ExponentialWeight(0.5))
        for value in [1.0, 2.0, 3.0]:
            m.update(value)
        assert m.mean() == pytest.approx(2.25)
        assert m.variance() == pytest.approx(0.6875)

    @pytest.mark.parametrize("schedule", ALL_SCHEDULES, ids=lambda s: s.name)
    def test_variance_nonnegative(self, schedule, rng):
        """Variance never goes negative."""
        m = StreamingMoment(schedule)
        data = np.concatenate([
            rng.standard_normal(100) * 1e6,
            np.full(50, 1e12),
            rng.standard_normal(100) * 1e-8,
        ])
        for value in data:
            m.update(value)
            assert m.variance() >= 0.0

    def test_reset(self):
        """Reset zeroes the statistics and restarts the weights."""
        m = StreamingMoment()
        for value in [1.0, 5.0, 9.0]:
            m.update(value)
        m.reset()
        assert (m.mean(), m.variance(), m.n) == (0.0, 0.0, 0)
        assert m.weight.steps_seen == 0
        m.update(4.0)
        assert m.mean() == 4.0

    def test_schedule_is_copied(self):
        """Moments built from one schedule do not share its counter."""
        template = ExponentialWeight(0.3)
        a = StreamingMoment(template)
        b = StreamingMoment(template)
        for value in [1.0, 2.0, 3.0]:
            a.update(value)
        assert template.steps_seen == 0
        assert a.weight.steps_seen == 3
        assert b.weight.steps_seen == 0


# ============================================================================
# Tests for Normalizer
# ============================================================================


class TestNormalizer:
    """Tests for the reversible normalization."""

    @pytest.fixture
    def normalizer(self):
        norm = Normalizer(2)
        norm.update(3.0, [1.0, 2.0])
        norm.update(5.0, [2.0, 4.0])
        norm.update(10.0, [0.0, 1.0])
        return norm

    def test_statistics(self, normalizer):
        """Underlying moments see the raw values."""
        assert normalizer.y_moment.mean() == pytest.approx(6.0)
        assert normalizer.y_moment.variance() == pytest.approx(26.0 / 3.0)
        np.testing.assert_allclose(normalizer.x_means(), [1.0, 7.0 / 3.0])

    def test_normalize_divides_by_variance(self, normalizer):
        """Values are centered and divided by the variance."""
        assert normalizer.normalize_y(6.0 + 26.0 / 3.0) == pytest.approx(1.0)
        z = normalizer.normalize_x([1.0, 7.0 / 3.0])
        np.testing.assert_allclose(z, [0.0, 0.0], atol=1e-12)

    @pytest.mark.parametrize("y", [3.0, 10.0, -7.25, 123.0])
    def test_round_trip(self, normalizer, y):
        """denormalize_y inverts normalize_y between updates."""
        assert normalizer.denormalize_y(normalizer.normalize_y(y)) == pytest.approx(y)

    def test_round_trip_x(self, normalizer):
        """denormalize_x inverts normalize_x between updates."""
        x = np.array([0.3, -4.0])
        np.testing.assert_allclose(normalizer.denormalize_x(normalizer.normalize_x(x)), x)

    def test_round_trip_single_update(self):
        """After one update the included value round-trips."""
        norm = Normalizer(1)
        norm.update(7.5, [1.0])
        assert norm.denormalize_y(norm.normalize_y(7.5)) == 7.5

    def test_repeated_calls_are_stable(self, normalizer):
        """Normalization does not change state."""
        first = normalizer.normalize_y(4.2)
        assert normalizer.normalize_y(4.2) == first

    def test_zero_variance_unit_scale(self):
        """Zero variance is treated as one instead of dividing by zero."""
        norm = Normalizer(2)
        norm.update(2.0, [4.0, -1.0])
        assert norm.normalize_y(5.0) == pytest.approx(3.0)
        np.testing.assert_allclose(norm.normalize_x([5.0, 1.0]), [1.0, 2.0])

    def test_not_a_round_trip_across_update(self, normalizer):
        """Normalizing, updating, then denormalizing uses new statistics."""
        z = normalizer.normalize_y(4.0)
        normalizer.update(50.0, [3.0, 3.0])
        assert normalizer.denormalize_y(z) != pytest.approx(4.0)

    def test_wrong_length(self):
        """Feature vectors must have n_features entries."""
        norm = Normalizer(3)
        with pytest.raises(ConfigurationError, match="shape"):
            norm.update(1.0, [1.0, 2.0])

    def test_reset(self, normalizer):
        """Reset clears every moment."""
        normalizer.reset()
        assert normalizer.y_moment.n == 0
        assert all(m.n == 0 for m in normalizer.x_moments)

    def test_if0then1(self):
        """Zeros become ones, other values pass through."""
        assert if0then1(0.0) == 1.0
        assert if0then1(2.5) == 2.5
        np.testing.assert_array_equal(if0then1(np.array([0.0, 3.0])), [1.0, 3.0])
