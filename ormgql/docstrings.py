"""Read descriptions and type declarations out of docstrings.

Both Sphinx field lists and Google style sections are understood::

    def get_posts(self, limit, status=None):
        '''Posts written by this user.

        :param int limit: How many posts at most
        :param status: Only posts with this status
        :type status: Optional[PostStatus]
        :rtype: List[Post]
        '''

    def get_posts(self, limit, status=None):
        '''Posts written by this user.

        Args:
            limit (int): How many posts at most
            status (Optional[PostStatus]): Only posts with this status

        Returns:
            List[Post]: The posts
        '''
"""
from __future__ import annotations

import inspect
import re
from typing import Any, Dict, List, Match, Optional, Tuple

__all__ = ["DocstringReader"]

_SPHINX_FIELD = re.compile(r"^:(\w+)([^:]*):\s*(.*)$")
_GOOGLE_SECTION = re.compile(
    r"^(Args|Arguments|Parameters|Params|Returns|Return|Raises|Yields|Examples?|Notes?|Attributes|See Also|Warnings?):\s*$"
)
_GOOGLE_ARG = re.compile(r"^\**(\w+)\s*(?:\(([^)]*)\))?\s*:\s*(.*)$")
_TYPE_CHARS = re.compile(r"^[\w.\[\],|]+$")

_PARAM_TAGS = {"param", "parameter", "arg", "argument", "key", "keyword"}
_RETURN_TYPE_TAGS = {"rtype", "returntype"}


def _looks_like_type(text: str) -> bool:
    compact = re.sub(r"\s*([|,\[\]])\s*", r"\1", text.strip())
    return bool(compact) and bool(_TYPE_CHARS.match(compact))


def _normalize_type(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    text = re.sub(r",\s*optional\s*$", "", text.strip())
    return text or None


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip())


class DocstringReader:
    """Parsed docstring of a function or a class."""

    def __init__(self, obj: Any):
        raw = getattr(obj, "__doc__", None)
        self.doc = inspect.cleandoc(raw) if isinstance(raw, str) else ""
        self._description: List[str] = []
        self._param_types: Dict[str, str] = {}
        self._param_descriptions: Dict[str, str] = {}
        self._return_type: Optional[str] = None
        self._parse()

    def get_method_description(self) -> Optional[str]:
        text = "\n".join(self._description).strip()
        return text or None

    def get_parameter_description(self, name: str) -> Optional[str]:
        return self._param_descriptions.get(name) or None

    def get_parameter_type(self, name: str) -> Optional[str]:
        return self._param_types.get(name)

    def get_return_type(self) -> Optional[str]:
        return self._return_type

    def _parse(self) -> None:
        lines = self.doc.splitlines()
        index = 0
        in_fields = False
        while index < len(lines):
            line = lines[index]
            stripped = line.strip()
            field = _SPHINX_FIELD.match(stripped)
            if field:
                in_fields = True
                index = self._parse_sphinx_field(field, lines, index)
                continue
            section = _GOOGLE_SECTION.match(stripped)
            if section:
                in_fields = True
                index = self._parse_google_section(section.group(1), lines, index)
                continue
            if not in_fields:
                self._description.append(line)
            index += 1

    def _parse_sphinx_field(self, match: Match[str], lines: List[str], index: int) -> int:
        tag, argument, text = match.group(1).lower(), match.group(2).strip(), match.group(3)
        index += 1
        # Continuation lines belong to the current field until the next field or blank line
        while index < len(lines) and lines[index].strip() and not _SPHINX_FIELD.match(lines[index].strip()):
            text += " " + lines[index].strip()
            index += 1
        text = text.strip()

        if tag in _PARAM_TAGS and argument:
            param_type, name = self._split_sphinx_param(argument)
            if param_type:
                self._param_types[name] = param_type
            self._param_descriptions[name] = text
        elif tag == "type" and argument:
            param_type = _normalize_type(text)
            if param_type:
                self._param_types[argument] = param_type
        elif tag in _RETURN_TYPE_TAGS:
            self._return_type = _normalize_type(text)
        return index

    @staticmethod
    def _split_sphinx_param(argument: str) -> Tuple[Optional[str], str]:
        parts = argument.rsplit(None, 1)
        if len(parts) == 1:
            return None, parts[0]
        return _normalize_type(parts[0]), parts[1]

    def _parse_google_section(self, section: str, lines: List[str], index: int) -> int:
        base = _indent(lines[index])
        index += 1
        entries: List[Tuple[str, int]] = []
        while index < len(lines):
            line = lines[index]
            if line.strip() and _indent(line) <= base:
                break
            if line.strip():
                entries.append((line.strip(), _indent(line)))
            index += 1

        if not entries:
            return index
        if section in ("Args", "Arguments", "Parameters", "Params"):
            self._parse_google_args(entries)
        elif section in ("Returns", "Return"):
            first = entries[0][0]
            head, sep, _ = first.partition(":")
            if sep and _looks_like_type(head):
                self._return_type = _normalize_type(head)
            elif not sep and " " not in first and _looks_like_type(first):
                self._return_type = first
        return index

    def _parse_google_args(self, entries: List[Tuple[str, int]]) -> None:
        entry_indent = entries[0][1]
        current: Optional[str] = None
        for text, indent in entries:
            match = _GOOGLE_ARG.match(text) if indent == entry_indent else None
            if match:
                current = match.group(1)
                param_type = _normalize_type(match.group(2))
                if param_type:
                    self._param_types[current] = param_type
                self._param_descriptions[current] = match.group(3).strip()
            elif current is not None:
                joined = f"{self._param_descriptions.get(current, '')} {text}"
                self._param_descriptions[current] = joined.strip()
