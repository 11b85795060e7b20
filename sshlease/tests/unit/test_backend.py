import pytest

from sshlease.backend import Backend
from sshlease.config import AppConfig, LeasePolicyConfig
from sshlease.duration import HOUR, Duration
from sshlease.errors import RequestError, UnsupportedOperation, UnsupportedPath
from sshlease.framework import (
    FieldData,
    FieldSchema,
    Operation,
    Path,
    PathRegistry,
    Request,
    Response,
)
from sshlease.lease import CONFIG_LEASE_KEY
from sshlease.storage import InmemStorage


def test_backend_mounts_config_lease_path() -> None:
    assert Backend().paths == [CONFIG_LEASE_KEY]


def test_backend_write_and_lease_accessor() -> None:
    backend = Backend()
    storage = InmemStorage()
    assert backend.lease(storage) is None

    response = backend.write(storage, CONFIG_LEASE_KEY, {"lease": "1h", "lease_max": "24h"})

    assert response is None
    config = backend.lease(storage)
    assert config is not None
    assert config.lease == Duration(HOUR)
    assert config.lease_max == Duration(24 * HOUR)


def test_backend_missing_field_is_error_response() -> None:
    backend = Backend()
    storage = InmemStorage()
    response = backend.write(storage, CONFIG_LEASE_KEY, {"lease": "1h"})
    assert response == Response(error="Missing lease_max")
    assert backend.lease(storage) is None


def test_backend_coerces_numeric_fields_to_strings() -> None:
    backend = Backend()
    response = backend.write(InmemStorage(), CONFIG_LEASE_KEY, {"lease": 3600, "lease_max": "24h"})
    assert response is not None
    assert response.error == "Invalid 'lease': time: missing unit in duration \"3600\""


def test_backend_rejects_non_string_fields() -> None:
    backend = Backend()
    storage = InmemStorage()
    response = backend.write(storage, CONFIG_LEASE_KEY, {"lease": ["1h"], "lease_max": "24h"})
    assert response == Response(error="Field validation failed: 'lease' must be a string")
    assert backend.lease(storage) is None


def test_backend_ignores_unknown_fields() -> None:
    backend = Backend()
    storage = InmemStorage()
    response = backend.write(
        storage, CONFIG_LEASE_KEY, {"lease": "1h", "lease_max": "2h", "ttl": "5m"}
    )
    assert response is None


def test_backend_honours_permissive_policy() -> None:
    strict = Backend()
    permissive = Backend(AppConfig(lease=LeasePolicyConfig(require_positive=False)))
    data = {"lease": "0", "lease_max": "1h"}

    assert strict.write(InmemStorage(), CONFIG_LEASE_KEY, data).is_error()
    assert permissive.write(InmemStorage(), CONFIG_LEASE_KEY, data) is None


def test_backend_help_describes_fields() -> None:
    response = Backend().help(CONFIG_LEASE_KEY)
    assert response.data["synopsis"].startswith("Configure the default and maximum lease")
    assert set(response.data["fields"]) == {"lease", "lease_max"}
    assert response.data["fields"]["lease"]["type"] == "string"


def test_backend_read_is_not_routed() -> None:
    backend = Backend()
    request = Request(operation=Operation.READ, path=CONFIG_LEASE_KEY, storage=InmemStorage())
    with pytest.raises(UnsupportedOperation):
        backend.handle_request(request)


def test_backend_unknown_path() -> None:
    with pytest.raises(UnsupportedPath) as excinfo:
        Backend().write(InmemStorage(), "config/unknown", {})
    assert isinstance(excinfo.value, RequestError)
    assert excinfo.value.path == "config/unknown"


def test_backend_help_for_unknown_path() -> None:
    with pytest.raises(UnsupportedPath):
        Backend().help("config/unknown")


def test_registry_duplicate_registration() -> None:
    registry = PathRegistry()
    registry.register(Path(pattern="config/lease"))
    with pytest.raises(ValueError):
        registry.register(Path(pattern="config/lease"))


def test_registry_passes_field_data_to_handler() -> None:
    seen: dict[str, object] = {}

    def handler(request: Request, data: FieldData) -> Response:
        seen["name"] = data.get("name")
        seen["count"] = data.get("count")
        return Response(data={"ok": True})

    registry = PathRegistry()
    registry.register(
        Path(
            pattern="echo",
            fields={"name": FieldSchema(), "count": FieldSchema(default="1")},
            callbacks={Operation.WRITE: handler},
        )
    )
    response = registry.dispatch(
        Request(operation=Operation.WRITE, path="echo", storage=InmemStorage(), data={"name": 7})
    )
    assert response == Response(data={"ok": True})
    assert seen == {"name": "7", "count": "1"}


def test_field_data_rejects_undeclared_field() -> None:
    data = FieldData(raw={"other": "x"}, schema={"name": FieldSchema()})
    assert data.get("name") == ""
    with pytest.raises(KeyError):
        data.get("other")
