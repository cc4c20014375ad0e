"""Unit tests for the replay motion source."""

import pytest

from imu_height.data import CapabilityStatus, ReplayMotionSource, Subscription


@pytest.fixture
def samples(generator):
    """Provide one second of samples at 50 Hz."""
    return generator.flat(1.0)


class TestSubscription:
    """Test subscription handles."""

    def test_unsubscribe_is_idempotent(self):
        """Test that the release callback runs once."""
        calls = []
        subscription = Subscription(lambda: calls.append(1))

        subscription.unsubscribe()
        subscription.unsubscribe()

        assert calls == [1]
        assert not subscription.active


class TestReplayMotionSource:
    """Test virtual-time replay."""

    def test_wait_delivers_half_open_window(self, samples):
        """Test that a sample at the deadline belongs to the next wait."""
        source = ReplayMotionSource(samples)
        received = []
        source.subscribe(received.append)

        source.wait(0.1)
        assert [s.timestamp_ms for s in received] == [0.0, 20.0, 40.0, 60.0, 80.0]

        source.wait(0.1)
        assert len(received) == 10
        assert received[5].timestamp_ms == 100.0

    def test_wait_none_drains(self, samples):
        """Test that waiting without a duration delivers everything."""
        source = ReplayMotionSource(samples)
        received = []
        source.subscribe(received.append)

        source.wait()

        assert len(received) == len(samples)
        assert source.remaining == 0

    def test_unsubscribed_samples_are_lost(self, samples):
        """Test that nobody receives samples after unsubscribing."""
        source = ReplayMotionSource(samples)
        received = []
        subscription = source.subscribe(received.append)

        source.wait(0.1)
        subscription.unsubscribe()
        source.wait(0.1)

        assert len(received) == 5
        assert source.subscriber_count == 0
        assert source.remaining == len(samples) - 10

    def test_multiple_subscribers(self, samples):
        """Test that every subscriber sees every sample."""
        source = ReplayMotionSource(samples)
        first, second = [], []
        source.subscribe(first.append)
        source.subscribe(second.append)

        source.wait()

        assert first == second == samples

    def test_capability_reporting(self):
        """Test the configured availability and permission answers."""
        source = ReplayMotionSource(
            [], available=False, capability=CapabilityStatus.DENIED
        )

        assert not source.is_available()
        assert source.request_capability() == CapabilityStatus.DENIED

    def test_empty_source(self):
        """Test that an empty source delivers nothing."""
        source = ReplayMotionSource([])
        received = []
        source.subscribe(received.append)

        source.wait(1.0)

        assert received == []
