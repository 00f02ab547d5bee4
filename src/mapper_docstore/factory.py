"""Two-step construction: options first, mapper later."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .adapter import DocstoreAdapter
from .config import AdapterOptions

if TYPE_CHECKING:
    from .ports import Mapper


def docstore_adapter_factory(
    options: AdapterOptions | Mapping[str, Any] | None = None,
) -> Callable[[Mapper], DocstoreAdapter]:
    """Validate ``options`` now and return ``mapper -> DocstoreAdapter``.

    Lets a mapper that builds its storage adapter itself be configured with
    just the returned callable.
    """
    resolved = AdapterOptions.coerce(options)

    def build(mapper: Mapper) -> DocstoreAdapter:
        return DocstoreAdapter(mapper, resolved)

    return build
