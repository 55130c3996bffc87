# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Version ordering for repository and image versions.

Used to order repoquery output newest first and to enforce the minimum
containerized version. Ordering is never used to pick between user inputs;
those are compared as plain strings.
"""

from __future__ import annotations

import re

# Known prerelease tag ordering (lower = older)
_PRE_TAG_RANK: dict[str, float] = {
    "dev": 0,
    "alpha": 1,
    "a": 1,
    "pre": 1,
    "beta": 2,
    "b": 2,
    "rc": 3,
}
_UNKNOWN_PRE_RANK = 2.5
_FINAL_RANK = 4.0

_NUM_SEP = re.compile(r"[._-]")


def _leading_release_tuple(s: str) -> tuple[int, ...]:
    """Extract the leading numeric tuple ("v3.6.1-alpha.1" -> (3, 6, 1)).

    Returns (0,) when the string has no numeric prefix at all.
    """
    s2 = s.strip().lower()
    if s2.startswith("v"):
        s2 = s2[1:]

    nums: list[int] = []
    for p in _NUM_SEP.split(s2):
        if not p:
            continue
        if p.isdigit():
            nums.append(int(p))
            continue
        m = re.match(r"(\d+)", p)
        if m:
            nums.append(int(m.group(1)))
        break
    return tuple(nums) if nums else (0,)


def _pre_segment(suffix: str) -> tuple[float, tuple[tuple[int, object], ...]]:
    """Rank a prerelease suffix ("-alpha.1" -> (1.0, ...)); finals rank 4.0."""
    m = re.search(r"(?i)([A-Za-z]+)[._-]?([0-9A-Za-z.\-]*)", suffix)
    if not m:
        return _FINAL_RANK, ()
    tag = m.group(1).lower()
    tokens: list[tuple[int, object]] = [(1, tag)]
    for t in re.split(r"[.\-]", m.group(2) or ""):
        if not t:
            continue
        tokens.append((0, int(t)) if t.isdigit() else (1, t.lower()))
    return float(_PRE_TAG_RANK.get(tag, _UNKNOWN_PRE_RANK)), tuple(tokens)


def version_key_any(s: str) -> tuple:
    """Compute a sortable key for a version string.

    "+build" metadata is ignored. Strings without a numeric prefix fall
    back to ("text", raw); compare_any treats them as older than any
    version-like string.
    """
    base = s.split("+", 1)[0]
    release = _leading_release_tuple(base)
    if release == (0,):
        return ("text", s)

    core_re = r"^\s*v?" + r"\.".join(str(n) for n in release)
    m = re.match(core_re, base, re.IGNORECASE)
    suffix = base[m.end() :] if m else ""
    rank, tokens = _pre_segment(suffix)
    return ("semverish", (release, rank, tokens))


def _pad_equal(
    a: tuple[int, ...], b: tuple[int, ...]
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    n = max(len(a), len(b))
    return a + (0,) * (n - len(a)), b + (0,) * (n - len(b))


def compare_any(a: str, b: str) -> int:
    """Compare two versions. Returns -1 if a < b, 0 if equal, 1 if a > b.

    Release tuples are zero padded, so "3.1" == "3.1.0". A string with no
    numeric prefix is older than any version.
    """
    ka = version_key_any(a)
    kb = version_key_any(b)
    if ka[0] != kb[0]:
        return -1 if ka[0] == "text" else 1
    if ka[0] == kb[0] == "semverish":
        ra, rb = _pad_equal(ka[1][0], kb[1][0])
        ka = (ka[0], (ra,) + ka[1][1:])
        kb = (kb[0], (rb,) + kb[1][1:])
    return (ka > kb) - (ka < kb)


def is_older_than(version: str, minimum: str) -> bool:
    """True iff version sorts strictly before minimum."""
    return compare_any(version, minimum) < 0


def sort_newest_first(versions: list[str]) -> list[str]:
    """Deduplicate versions and order them newest first.

    Strings that are not version-like keep their relative order at the end.
    """
    unique = list(dict.fromkeys(v for v in versions if v))
    versioned = [v for v in unique if version_key_any(v)[0] == "semverish"]
    text = [v for v in unique if version_key_any(v)[0] == "text"]
    return sorted(versioned, key=version_key_any, reverse=True) + text
