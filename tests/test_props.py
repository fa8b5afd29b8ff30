# tests/test_props.py
"""Property-based tests for id generation and extension choice"""

import re

from hypothesis import given, strategies as st

from qrselfie.services.tokens import ID_ALPHABET, generate_photo_id
from qrselfie.services.uploads import DEFAULT_EXT, MAX_EXT_LEN, MIME_TO_EXT, choose_extension

SAFE_EXT = re.compile(r"^\.[a-z0-9-]+$")


@given(st.integers(min_value=1, max_value=64))
def test_photo_id_length_and_alphabet(n):
    pid = generate_photo_id(n)
    assert len(pid) == n
    assert set(pid) <= set(ID_ALPHABET)


def test_photo_ids_are_distinct():
    ids = {generate_photo_id(10) for _ in range(5000)}
    assert len(ids) == 5000


@given(st.sampled_from(sorted(MIME_TO_EXT)), st.text(max_size=40))
def test_known_mime_wins_over_filename(mime, filename):
    assert choose_extension(mime, filename) == MIME_TO_EXT[mime]


@given(st.text(max_size=40), st.text(max_size=40))
def test_extension_is_always_path_safe(mime, filename):
    ext = choose_extension(mime, filename)
    assert SAFE_EXT.match(ext), ext
    assert len(ext) <= MAX_EXT_LEN + 1


def test_extension_fallbacks():
    assert choose_extension("image/PNG", None) == ".png"
    assert choose_extension("image/jpeg; charset=binary", "x") == ".jpg"
    assert choose_extension("application/octet-stream", "cat.HEIC") == ".heic"
    assert choose_extension(None, "../../etc/passwd") == DEFAULT_EXT
    assert choose_extension(None, None) == DEFAULT_EXT
    assert choose_extension(None, "a." + "x" * 300) == DEFAULT_EXT
    assert choose_extension(None, "a." + "y" * MAX_EXT_LEN) == "." + "y" * MAX_EXT_LEN
