"""
Tests for wellstream.streams.stream

Verify the stream/substream protocol and value generation.
"""

import copy
import dataclasses

import numpy as np
import pytest
from wellstream.config.schema import StreamConfig, WellStreamConfig
from wellstream.core.exceptions import InvalidSeedError, ValidationError
from wellstream.generators import WELL607
from wellstream.streams.seeds import SeedRegistry, default_seed_registry
from wellstream.streams.stream import NORM, FACT, RandomStream, create_streams


def raw(stream, n):
    return [stream.next_int() for _ in range(n)]


class TestConstruction:
    """Tests for RandomStream construction."""

    def test_explicit_seed(self, package_seed):
        stream = RandomStream(seed=package_seed)
        assert stream.stream_seed == tuple(package_seed)
        assert stream.substream_seed == tuple(package_seed)
        assert stream.get_state() == tuple(package_seed)
        assert stream.substream_index == 0
        assert stream.registry is None

    def test_explicit_seed_does_not_consume_registry(self, seed_registry, package_seed):
        RandomStream(seed=package_seed, registry=seed_registry)
        assert seed_registry.streams_created == 0

    def test_takes_from_registry(self, seed_registry, package_seed):
        stream = RandomStream(registry=seed_registry)
        assert stream.stream_seed == tuple(package_seed)
        assert stream.registry is seed_registry
        assert seed_registry.streams_created == 1

    def test_default_registry(self):
        stream = RandomStream()
        assert stream.stream_seed == WELL607.default_seed
        assert stream.registry is default_seed_registry()
        assert default_seed_registry().package_seed == WELL607.jump_stream(WELL607.default_seed)

    def test_invalid_seed_fails(self):
        with pytest.raises(InvalidSeedError):
            RandomStream(seed=[0] * 19)

    def test_invalid_seed_leaves_registry_unchanged(self, seed_registry):
        before = seed_registry.package_seed
        with pytest.raises(InvalidSeedError):
            RandomStream(seed=[0] * 18 + [0x80000000], registry=seed_registry)
        assert seed_registry.package_seed == before
        assert seed_registry.streams_created == 0

    def test_wrong_length_fails(self):
        with pytest.raises(InvalidSeedError):
            RandomStream(seed=list(range(1, 10)))

    def test_flags_default_off(self, stream):
        assert stream.antithetic is False
        assert stream.increased_precision is False


class TestStreamProtocol:
    """Tests for resets and substreams."""

    def test_reset_start_stream_reproduces(self, stream):
        first = raw(stream, 30)
        stream.reset_start_stream()
        assert raw(stream, 30) == first

    def test_reset_start_substream_reproduces(self, stream):
        stream.reset_next_substream()
        first = raw(stream, 30)
        stream.reset_start_substream()
        assert raw(stream, 30) == first
        assert stream.substream_index == 1

    def test_reset_next_substream(self, stream, package_seed):
        stream.reset_next_substream()
        assert stream.substream_seed == WELL607.jump_substream(package_seed)
        assert stream.stream_seed == tuple(package_seed)
        assert stream.substream_index == 1
        assert stream.get_state() == stream.substream_seed

    def test_successive_substreams(self, stream, package_seed):
        stream.reset_next_substream()
        stream.reset_next_substream()
        expected = WELL607.jump_substream(WELL607.jump_substream(package_seed))
        assert stream.substream_seed == expected
        assert stream.substream_index == 2

    def test_substream_matches_fresh_stream(self, stream):
        stream.reset_next_substream()
        fresh = RandomStream(seed=stream.substream_seed)
        assert raw(stream, 20) == raw(fresh, 20)

    def test_reset_start_stream_after_substreams(self, stream, package_seed):
        stream.reset_next_substream()
        stream.reset_next_substream()
        stream.reset_start_stream()
        assert stream.substream_seed == tuple(package_seed)
        assert stream.substream_index == 0
        assert stream.get_state() == tuple(package_seed)

    def test_reset_matches_fresh_stream(self, stream):
        raw(stream, 15)
        stream.reset_next_substream()
        stream.reset_start_stream()
        stream.reset_start_substream()

        fresh = RandomStream(seed=stream.stream_seed)
        assert stream.get_state() == fresh.get_state()
        assert raw(stream, 40) == raw(fresh, 40)

    def test_set_seed(self, stream, other_seed):
        stream.reset_next_substream()
        stream.set_seed(other_seed)
        assert stream.stream_seed == tuple(other_seed)
        assert stream.substream_seed == tuple(other_seed)
        assert stream.substream_index == 0

    def test_set_invalid_seed_leaves_stream_unchanged(self, stream):
        raw(stream, 3)
        before = stream.snapshot()
        with pytest.raises(InvalidSeedError):
            stream.set_seed([0] * 19)
        assert stream.snapshot() == before

    def test_set_seed_does_not_touch_registry(self, stream, seed_registry, other_seed):
        before = seed_registry.package_seed
        stream.set_seed(other_seed)
        assert seed_registry.package_seed == before


class TestStreamSpacing:
    """Streams from one registry do not overlap."""

    def test_end_to_end(self, seed_registry, package_seed):
        a = RandomStream("A", registry=seed_registry)
        b = RandomStream("B", registry=seed_registry)

        assert a.stream_seed == tuple(package_seed)
        assert b.stream_seed == WELL607.jump_stream(package_seed)

        first_at_zero = a.next_int()
        a.reset_next_substream()
        assert a.substream_seed == WELL607.jump_substream(package_seed)
        assert a.next_int() != first_at_zero

    def test_substream_seeds_never_hit_next_stream(self, seed_registry):
        a = RandomStream(registry=seed_registry)
        b = RandomStream(registry=seed_registry)

        seen = {a.stream_seed}
        for _ in range(6):
            a.reset_next_substream()
            seen.add(a.substream_seed)

        assert len(seen) == 7
        assert b.stream_seed not in seen

    def test_different_word_zero_different_first_output(self, package_seed):
        other = [package_seed[0] + 1] + package_seed[1:]
        a = RandomStream(seed=package_seed)
        b = RandomStream(seed=other)
        assert a.next_int() != b.next_int()

    def test_streams_independent(self, seed_registry):
        a = RandomStream(registry=seed_registry)
        b = RandomStream(registry=seed_registry)
        expected_b = raw(b.clone(), 10)
        raw(a, 100)
        assert raw(b, 10) == expected_b


class TestGeneration:
    """Tests for doubles and integers."""

    def test_next_int_is_raw_word(self, stream, package_seed):
        core = WELL607.new_core(package_seed)
        assert raw(stream, 10) == [core.step_raw() for _ in range(10)]

    def test_next_double_scaling(self, stream, package_seed):
        core = WELL607.new_core(package_seed)
        for _ in range(20):
            x = core.step_raw() or 0x100000000
            assert stream.next_double() == x * NORM

    def test_next_double_range(self, stream):
        values = [stream.next_double() for _ in range(2000)]
        assert all(0.0 < u < 1.0 for u in values)

    def test_next_double_mean(self, stream):
        values = stream.next_array_of_double(5000)
        assert abs(values.mean() - 0.5) < 0.03

    def test_array_of_double(self, stream):
        arr = stream.next_array_of_double(50)
        stream.reset_start_stream()
        expected = [stream.next_double() for _ in range(50)]
        assert isinstance(arr, np.ndarray)
        assert arr.dtype == np.float64
        assert arr.shape == (50,)
        np.testing.assert_array_equal(arr, expected)

    def test_array_of_double_empty(self, stream):
        assert stream.next_array_of_double(0).shape == (0,)

    def test_array_negative_length_fails(self, stream):
        with pytest.raises(ValidationError):
            stream.next_array_of_double(-1)

    def test_values_reflect_advancement(self, stream):
        assert stream.next_double() != stream.next_double()

    def test_antithetic(self, stream):
        plain = stream.next_array_of_double(100)
        stream.reset_start_stream()
        stream.antithetic = True
        anti = stream.next_array_of_double(100)
        np.testing.assert_allclose(plain + anti, 1.0, rtol=0, atol=1e-12)

    def test_increased_precision_consumes_two_words(self, stream, package_seed):
        stream.increased_precision = True
        u = stream.next_double()

        core = WELL607.new_core(package_seed)
        a, b = core.step_raw() or 0x100000000, core.step_raw() or 0x100000000
        assert u == (a * NORM + b * NORM * FACT) % 1.0
        assert stream.get_state() == core.get_state()

    def test_increased_precision_range(self, stream):
        stream.increased_precision = True
        values = stream.next_array_of_double(2000)
        assert np.all(values >= 0.0)
        assert np.all(values < 1.0)

    def test_uniform_int_bounds(self, stream):
        values = [stream.uniform_int(3, 7) for _ in range(1000)]
        assert min(values) == 3
        assert max(values) == 7

    def test_uniform_int_single_point(self, stream):
        assert stream.uniform_int(5, 5) == 5

    def test_uniform_int_negative_range(self, stream):
        values = [stream.uniform_int(-2, 2) for _ in range(200)]
        assert set(values) <= {-2, -1, 0, 1, 2}

    def test_uniform_int_antithetic_bounds(self, stream):
        stream.antithetic = True
        stream.increased_precision = True
        values = [stream.uniform_int(0, 9) for _ in range(1000)]
        assert min(values) >= 0
        assert max(values) <= 9

    def test_uniform_int_reversed_fails(self, stream):
        with pytest.raises(ValidationError, match="9 is larger than 1"):
            stream.uniform_int(9, 1)

    def test_array_of_int(self, stream):
        arr = stream.next_array_of_int(0, 5, 100)
        assert arr.dtype == np.int64
        assert arr.min() >= 0
        assert arr.max() <= 5


class TestIntrospection:
    """Tests for get_state and display strings."""

    def test_get_state_does_not_advance(self, stream):
        stream.get_state()
        stream.get_state()
        first = stream.next_int()
        stream.reset_start_stream()
        assert stream.next_int() == first

    def test_display_named(self, package_seed):
        stream = RandomStream("arrivals", seed=package_seed)
        words = ", ".join(str(w) for w in package_seed)
        assert stream.to_display_string() == f"The state of arrivals is : {{{words}}}"
        assert str(stream) == stream.to_display_string()

    def test_display_unnamed(self, package_seed):
        stream = RandomStream(seed=package_seed)
        assert stream.to_display_string().startswith("The state of this WELL607 is : {1, 2, 3")

    def test_repr(self, stream):
        assert repr(stream) == "RandomStream(name='test_stream', family='well607', substream=0)"


class TestSnapshots:
    """Tests for snapshot, restore and clone."""

    def test_snapshot_fields(self, stream):
        stream.reset_next_substream()
        raw(stream, 5)
        snap = stream.snapshot()
        assert snap.family == "well607"
        assert snap.stream_seed == stream.stream_seed
        assert snap.substream_seed == stream.substream_seed
        assert snap.state == stream.get_state()
        assert snap.substream_index == 1
        assert snap.name == "test_stream"

    def test_restore_resumes_mid_substream(self, stream, other_seed):
        raw(stream, 11)
        snap = stream.snapshot()
        expected = raw(stream, 30)

        other = RandomStream(seed=other_seed)
        other.restore(snap)
        assert raw(other, 30) == expected
        assert other.name == "test_stream"

    def test_restore_keeps_protocol(self, stream):
        stream.reset_next_substream()
        raw(stream, 7)
        snap = stream.snapshot()

        restored = RandomStream.from_snapshot(snap)
        restored.reset_start_substream()
        stream.reset_start_substream()
        assert raw(restored, 10) == raw(stream, 10)

        restored.reset_next_substream()
        assert restored.substream_index == 2

    def test_restore_flags(self, stream):
        stream.antithetic = True
        restored = RandomStream.from_snapshot(stream.snapshot())
        assert restored.antithetic is True

    def test_from_snapshot_does_not_consume(self, stream, seed_registry):
        before = seed_registry.streams_created
        restored = RandomStream.from_snapshot(stream.snapshot(), registry=seed_registry)
        assert seed_registry.streams_created == before
        assert restored.registry is seed_registry

    def test_restore_family_mismatch_fails(self, stream):
        snap = stream.snapshot()
        foreign = type(snap)(
            family="mt19937",
            stream_seed=snap.stream_seed,
            substream_seed=snap.substream_seed,
            state=snap.state,
        )
        with pytest.raises(ValidationError, match="family"):
            stream.restore(foreign)

    def test_restore_length_mismatch_fails(self, stream):
        snap = type(stream.snapshot())(
            family="well607", stream_seed=(1, 2), substream_seed=(1, 2), state=(1, 2),
        )
        with pytest.raises(ValidationError, match="expected 19"):
            stream.restore(snap)

    def test_restore_oversized_state_word_fails(self, stream):
        snap = stream.snapshot()
        bad = dataclasses.replace(snap, state=(1 << 40,) + snap.state[1:])
        with pytest.raises(InvalidSeedError, match="state"):
            stream.restore(bad)

    def test_restore_zero_substream_seed_fails(self, stream):
        bad = dataclasses.replace(stream.snapshot(), substream_seed=(0,) * 19)
        with pytest.raises(InvalidSeedError, match="substream_seed"):
            stream.restore(bad)

    def test_restore_forbidden_stream_seed_fails(self, stream):
        bad = dataclasses.replace(stream.snapshot(), stream_seed=(0,) * 18 + (0x80000000,))
        with pytest.raises(InvalidSeedError, match="stream_seed"):
            stream.restore(bad)

    def test_failed_restore_leaves_stream_unchanged(self, stream):
        raw(stream, 6)
        before = stream.snapshot()
        bad = dataclasses.replace(
            before, name="other", substream_index=5, state=(0,) * 19,
        )
        with pytest.raises(InvalidSeedError):
            stream.restore(bad)
        assert stream.snapshot() == before

    def test_restore_keeps_outputs_in_range(self, stream):
        raw(stream, 9)
        stream.restore(stream.snapshot())
        assert all(0 <= x <= 0xFFFFFFFF for x in raw(stream, 50))

    def test_restore_signed_words_normalized(self, stream):
        raw(stream, 3)
        original = stream.get_state()
        signed = tuple(w - (1 << 32) if w >= (1 << 31) else w for w in original)
        stream.restore(dataclasses.replace(stream.snapshot(), state=signed))
        assert stream.get_state() == original

    def test_from_snapshot_invalid_state_fails(self, stream):
        bad = dataclasses.replace(stream.snapshot(), state=(0,) * 19)
        with pytest.raises(InvalidSeedError):
            RandomStream.from_snapshot(bad)

    def test_clone_independent(self, stream):
        raw(stream, 4)
        twin = stream.clone()
        expected = raw(stream, 25)
        assert raw(twin, 25) == expected

        stream.reset_next_substream()
        assert twin.substream_index == 0
        assert twin.get_state() != stream.get_state()

    def test_clone_shares_registry(self, stream, seed_registry):
        assert stream.clone().registry is seed_registry

    def test_copy_module(self, stream):
        for twin in (copy.copy(stream), copy.deepcopy(stream)):
            assert twin.snapshot() == stream.snapshot()
            twin.next_int()
            assert twin.get_state() != stream.get_state()


class TestCreateStreams:
    """Tests for create_streams."""

    def test_names_and_order(self, seed_registry, package_seed):
        config = WellStreamConfig(streams=StreamConfig(n_streams=3, names=["a", "b", "c"]))
        streams = create_streams(config, seed_registry)

        assert [s.name for s in streams] == ["a", "b", "c"]
        assert streams[0].stream_seed == tuple(package_seed)
        assert streams[1].stream_seed == WELL607.jump_stream(package_seed)
        assert seed_registry.streams_created == 3

    def test_default_names(self, seed_registry):
        config = WellStreamConfig(streams=StreamConfig(n_streams=2))
        streams = create_streams(config, seed_registry)
        assert [s.name for s in streams] == ["stream_0", "stream_1"]

    def test_flags_applied(self, package_seed):
        config = WellStreamConfig(streams=StreamConfig(antithetic=True, increased_precision=True))
        (stream,) = create_streams(config, SeedRegistry(WELL607, package_seed))
        assert stream.antithetic is True
        assert stream.increased_precision is True
