from dataclasses import dataclass
from typing import Any, Dict, Optional

from requests import RequestException


@dataclass(frozen=True)
class DevServerResponse:
    """Outcome of a single request to the Vite dev server.

    Transport failures are kept in ``error`` instead of being raised. ``data`` is
    None unless a 2xx response carried a JSON object.
    """

    status_code: int
    data: Optional[Dict[str, Any]] = None
    error: Optional[RequestException] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status_code == 200
