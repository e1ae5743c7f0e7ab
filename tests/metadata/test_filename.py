"""Tests for metadata parsed from file names."""

import pytest

from audioshelf.metadata.filename import (
    extract_search_query,
    metadata_for_files,
    metadata_from_filename,
)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("01 - Dune_(Unabridged).mp3", "Dune"),
        ("Project_Hail_Mary.m4b", "Project Hail Mary"),
        ("[03] The Hobbit (Audiobook).mp3", "The Hobbit"),
        ("Emma.unabridged.mp3", "Emma"),
        ("Leviathan-Wakes.flac", "Leviathan Wakes"),
    ],
)
def test_extract_search_query(filename: str, expected: str) -> None:
    assert extract_search_query(filename) == expected


def test_metadata_from_filename_with_series() -> None:
    meta = metadata_from_filename("Mistborn - Book 1 - The Final Empire.mp3")
    assert meta.title == "The Final Empire"
    assert meta.series == "Mistborn"
    assert meta.series_number == 1
    assert meta.author is None


def test_metadata_from_filename_plain_title() -> None:
    meta = metadata_from_filename("01 - Dune_(Unabridged).mp3")
    assert meta.title == "Dune"
    assert meta.series is None


def test_metadata_for_files(make_file) -> None:
    files = [
        make_file("Project_Hail_Mary.m4b"),
        make_file("Mistborn Book 2 - The Well of Ascension.mp3"),
    ]
    metadata = metadata_for_files(files)
    assert set(metadata) == {f.id for f in files}
    assert metadata[files[0].id].title == "Project Hail Mary"
    assert metadata[files[1].id].series == "Mistborn"
