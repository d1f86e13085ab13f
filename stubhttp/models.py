# Copyright (C) 2012 Anaconda, Inc
# SPDX-License-Identifier: BSD-3-Clause
"""Request and response values exchanged between a test server and its handler."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING
from urllib.parse import parse_qs, urlsplit

from requests.structures import CaseInsensitiveDict

if TYPE_CHECKING:
    from typing import Any


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    @property
    def url_path(self) -> str:
        return urlsplit(self.path).path

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(urlsplit(self.path).query, keep_blank_values=True)

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class Response:
    status: int = 200
    body: bytes | str = b""
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, value: Response | str | bytes) -> Response:
        """Turn a handler's return value into a :class:`Response`.

        Plain ``str`` or ``bytes`` become a 200 response carrying that body.
        """
        if isinstance(value, Response):
            return value
        if isinstance(value, (str, bytes)):
            return cls(body=value)
        raise TypeError(
            f"handler must return Response, str or bytes, not {type(value).__name__}"
        )

    @property
    def content(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body
