from hypothesis import given, strategies as st

from sshlease.duration import HOUR, MILLISECOND, MINUTE, SECOND, Duration, format_duration, parse_duration
from sshlease.lease import read_lease_config, write_lease_config
from sshlease.storage import InmemStorage

_INT64 = st.integers(min_value=-(1 << 63), max_value=(1 << 63) - 1)
_POSITIVE = st.integers(min_value=1, max_value=(1 << 63) - 1)


@given(_INT64)
def test_format_then_parse_is_identity(nanoseconds: int) -> None:
    assert parse_duration(format_duration(nanoseconds)) == nanoseconds


@given(
    st.integers(min_value=0, max_value=10_000),
    st.integers(min_value=0, max_value=59),
    st.integers(min_value=0, max_value=59),
    st.integers(min_value=0, max_value=999),
)
def test_multi_unit_expressions(hours: int, minutes: int, seconds: int, millis: int) -> None:
    text = f"{hours}h{minutes}m{seconds}s{millis}ms"
    expected = hours * HOUR + minutes * MINUTE + seconds * SECOND + millis * MILLISECOND
    assert Duration.parse(text).nanoseconds == expected


@given(_POSITIVE, _POSITIVE)
def test_write_read_preserves_values(lease_ns: int, lease_max_ns: int) -> None:
    storage = InmemStorage()
    lease_text = format_duration(lease_ns)
    lease_max_text = format_duration(lease_max_ns)

    assert write_lease_config(storage, lease_text, lease_max_text) is None

    config = read_lease_config(storage)
    assert config is not None
    assert config.lease == Duration(lease_ns)
    assert config.lease_max == Duration(lease_max_ns)
    assert str(config.lease) == lease_text


@given(st.lists(st.tuples(_POSITIVE, _POSITIVE), min_size=1, max_size=5))
def test_last_write_wins(writes: list[tuple[int, int]]) -> None:
    storage = InmemStorage()
    for lease_ns, lease_max_ns in writes:
        assert write_lease_config(storage, f"{lease_ns}ns", f"{lease_max_ns}ns") is None
    config = read_lease_config(storage)
    assert config is not None
    assert (config.lease.nanoseconds, config.lease_max.nanoseconds) == writes[-1]
