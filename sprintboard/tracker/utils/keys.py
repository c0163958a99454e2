# -*- coding: utf-8 -*-
import re

PROJECT_KEY_RE = re.compile(r"^[A-Z]{2,10}$")
DERIVED_KEY_LENGTH = 4

_NON_LETTERS_RE = re.compile(r"[^a-zA-Z]")


def derive_project_key(name: str) -> str:
    """Letters only, first four, uppercased: Website Redesign -> WEBS."""
    return _NON_LETTERS_RE.sub("", name or "")[:DERIVED_KEY_LENGTH].upper()


def is_valid_project_key(key: str) -> bool:
    return bool(PROJECT_KEY_RE.match(key or ""))


def format_issue_key(project_key: str, issue_number: int) -> str:
    return f"{project_key}-{issue_number}"
