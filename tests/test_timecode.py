"""Tests for time_reference propagation."""

import logging

import pytest

from bwfsplit.config import SAMPLES_PER_DAY
from bwfsplit.timecode import advance, format_clock, propagate_timecodes, samples_per_day


class TestAdvance:
    def test_no_wrap(self):
        assert advance(100, 50) == (150, False)

    def test_wrap(self):
        assert advance(SAMPLES_PER_DAY - 10, 25) == (15, True)

    def test_landing_exactly_on_midnight_wraps(self):
        assert advance(SAMPLES_PER_DAY - 10, 10) == (0, True)


class TestFormatClock:
    def test_midnight(self):
        assert format_clock(0) == "00:00:00"

    def test_partial_seconds_truncated(self):
        assert format_clock(48000 * 3661 + 47999) == "01:01:01"

    def test_last_second_of_day(self):
        assert format_clock(SAMPLES_PER_DAY - 1) == "23:59:59"


class TestPropagateTimecodes:
    def test_samples_per_day(self):
        assert samples_per_day(48000) == 4_147_200_000 == SAMPLES_PER_DAY

    def test_three_segments_from_zero(self):
        tcs = propagate_timecodes(0, 3, 21000, 48000)
        assert [t.samples for t in tcs] == [0, 1_008_000_000, 2_016_000_000]
        assert [t.index for t in tcs] == [1, 2, 3]
        assert [t.clock for t in tcs] == ["00:00:00", "05:50:00", "11:40:00"]
        assert not any(t.wrapped for t in tcs)

    def test_first_segment_keeps_initial(self):
        tcs = propagate_timecodes(123_456_789, 1)
        assert tcs[0].samples == 123_456_789

    def test_step_uses_max_duration_not_actual(self):
        # The final segment of a 45000 s file is only 3000 s long, yet a
        # hypothetical next segment would still be a full step further on.
        tcs = propagate_timecodes(0, 4, 21000, 48000)
        steps = [b.samples - a.samples for a, b in zip(tcs, tcs[1:])]
        assert steps == [1_008_000_000] * 3

    def test_wraparound(self, caplog):
        initial = 3_900_000_000
        with caplog.at_level(logging.WARNING, logger="bwfsplit.timecode"):
            tcs = propagate_timecodes(initial, 3, 21000, 48000)
        assert tcs[1].samples == (initial + 1_008_000_000) % SAMPLES_PER_DAY
        assert tcs[1].wrapped is True
        assert tcs[2].wrapped is False
        assert "wrapped around 24 hours" in caplog.text

    @pytest.mark.parametrize("initial", [0, 1, 2_000_000_000, SAMPLES_PER_DAY - 1])
    def test_matches_cumulative_sum_modulo_day(self, initial):
        n = 10
        tcs = propagate_timecodes(initial, n, 21000, 48000)
        for i, tc in enumerate(tcs):
            assert tc.samples == (initial + i * 1_008_000_000) % SAMPLES_PER_DAY
            assert 0 <= tc.samples < SAMPLES_PER_DAY

    def test_deterministic(self):
        assert propagate_timecodes(42, 5) == propagate_timecodes(42, 5)

    def test_other_sample_rate(self):
        tcs = propagate_timecodes(0, 2, max_segment_duration=21000, sample_rate=44100)
        assert tcs[1].samples == 926_100_000
        assert tcs[1].clock == "05:50:00"

    def test_initial_beyond_one_day_kept_for_first_segment(self, caplog):
        with caplog.at_level(logging.WARNING, logger="bwfsplit.timecode"):
            tcs = propagate_timecodes(SAMPLES_PER_DAY + 5, 2, 21000, 48000)
        assert tcs[0].samples == SAMPLES_PER_DAY + 5
        assert tcs[0].wrapped is False
        assert tcs[1].samples == 5 + 1_008_000_000
        assert tcs[1].wrapped is True
        assert "exceeds one day" in caplog.text

    def test_negative_initial_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            propagate_timecodes(-1, 2)

    def test_zero_segments(self):
        assert propagate_timecodes(0, 0) == []
