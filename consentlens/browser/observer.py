"""
Mutation observation bridge.
Exposes a Python callback to the page and installs a
``MutationObserver`` that forwards summaries of added elements to it.
"""

from __future__ import annotations

import pathlib
from collections.abc import Callable

import pydantic
from playwright import async_api

from consentlens.models import dom
from consentlens.utils import errors, logger

log = logger.create_logger("Mutation-Observer")

BINDING_NAME = "__consentlensMutations"

_SCRIPTS_DIR = pathlib.Path(__file__).parent / "scripts"
_OBSERVE_JS = (_SCRIPTS_DIR / "observe_mutations.js").read_text()


def parse_added_elements(raw: object) -> list[dom.AddedElement]:
    """Validate the page-side payload, dropping malformed entries."""
    if not isinstance(raw, list):
        return []
    added: list[dom.AddedElement] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        try:
            added.append(dom.AddedElement.model_validate(item))
        except pydantic.ValidationError:
            continue
    return added


async def expose_mutation_binding(
    page: async_api.Page,
    on_added: Callable[[list[dom.AddedElement]], object],
) -> bool:
    """Expose the callback to the page.  Do this once per page.

    The binding survives navigations; the observer itself does not
    and must be reinstalled with :func:`observe_mutations` after each
    load.
    """

    def _handle(raw: object) -> None:
        added = parse_added_elements(raw)
        if added:
            on_added(added)

    try:
        await page.expose_function(BINDING_NAME, _handle)
    except async_api.Error as error:
        log.warn("Could not expose mutation binding", {"error": errors.get_error_message(error)})
        return False
    return True


async def observe_mutations(page: async_api.Page) -> bool:
    """Install the observer on the current document.

    Returns:
        ``True`` if a new observer was installed.
    """
    try:
        installed = bool(await page.evaluate(_OBSERVE_JS, BINDING_NAME))
    except async_api.Error as error:
        log.warn("Could not install mutation observer", {"url": page.url, "error": errors.get_error_message(error)})
        return False
    if installed:
        log.debug("Mutation observer installed", {"url": page.url})
    return installed
