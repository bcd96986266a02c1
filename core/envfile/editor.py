"""
Pixie Env File - Config File Editor
===================================
Read/patch/write-back of the flat ``KEY=value`` configuration resource.

Rules:
- Whole-file overwrite, no lock, no atomic rename. Single writer only.
- A falsy value is written as the literal ``null`` (explicit unset),
  never as an empty string and never as a deletion.
- A key absent from the resource is appended as ``KEY=value``.
- Every line that does not carry the patched key is left untouched.
- A value python-dotenv would not read back verbatim (surrounding
  whitespace, a leading quote, `` #``, ``${``) is single-quoted.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from typing import Any, Union

from core.envfile.records import NULL_SENTINEL, EnvDocument, canonical_key

logger = logging.getLogger("pixie.envfile")

ResourceId = Union[str, "os.PathLike[str]"]

_NEEDS_QUOTES = re.compile(r"""^\s|\s$|^['"]|\s#|\$\{""")


def plain_value(value: Any) -> str:
    """The text a dotenv reader gets back for ``value``."""
    if not value:
        return NULL_SENTINEL
    if value is True:
        return "true"
    return str(value)


def quote_value(text: str) -> str:
    if not _NEEDS_QUOTES.search(text):
        return text
    # python-dotenv decodes only \\ and \' inside single quotes
    escaped = text.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def render_value(value: Any) -> str:
    return quote_value(plain_value(value))


class ConfigFileEditor:
    def __init__(self, encoding: str = "utf-8"):
        self._encoding = encoding

    def read(self, resource_id: ResourceId) -> str:
        # newline="" keeps \r\n intact so untouched lines survive byte-for-byte
        with open(resource_id, "r", encoding=self._encoding, newline="") as handle:
            return handle.read()

    def load(self, resource_id: ResourceId) -> EnvDocument:
        return EnvDocument.parse(self.read(resource_id))

    def write(self, resource_id: ResourceId, document: EnvDocument) -> None:
        with open(resource_id, "w", encoding=self._encoding, newline="") as handle:
            handle.write(document.render())

    def get(self, resource_id: ResourceId, key: str) -> str | None:
        return self.load(resource_id).get(key)

    def patch(self, resource_id: ResourceId, key: str, value: Any) -> None:
        self.patch_many(resource_id, {key: value})

    def patch_many(self, resource_id: ResourceId, values: Mapping[str, Any]) -> None:
        """Apply several keys with a single read and a single write-back."""
        document = self.load(resource_id)
        self._apply(document, values)
        self.write(resource_id, document)

    def seed_from_template(
        self,
        template_id: ResourceId,
        resource_id: ResourceId,
        values: Mapping[str, Any],
    ) -> None:
        """
        Build ``resource_id`` from ``template_id`` with ``values`` patched in.

        Used at bootstrap time, before any application code has loaded the
        new values. The target is overwritten in full.
        """
        document = self.load(template_id)
        self._apply(document, values)
        self.write(resource_id, document)
        logger.info(
            "Seeded %s from %s (%s).",
            os.fspath(resource_id),
            os.fspath(template_id),
            ", ".join(canonical_key(key) for key in values) or "no keys",
        )

    def _apply(self, document: EnvDocument, values: Mapping[str, Any]) -> None:
        for key, value in values.items():
            appended = key not in document
            document.set(key, render_value(value))
            if appended:
                logger.warning(
                    "Key %s was missing from the configuration resource; appended.",
                    canonical_key(key),
                )
            else:
                logger.debug("Patched %s.", canonical_key(key))
