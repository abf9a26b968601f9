"""Unit tests for source pointers and the source gate."""

import json
from unittest.mock import MagicMock, patch

import pytest

from hostdeploy.exceptions import DirtySourceError, SourcePointerError
from hostdeploy.models.source import CheckoutSource, PackedSource, SourcePointer
from hostdeploy.services.source_service import SourceGate, ThunkSource

POINTER = SourcePointer(url="https://git.example.com/app.git", rev="a" * 40, ref="main")


@pytest.fixture
def git():
    mock = MagicMock()
    mock.remote_url.return_value = POINTER.url
    mock.head_commit.return_value = POINTER.rev
    mock.current_branch.return_value = POINTER.ref
    return mock


class TestThunkSourceRead:
    """Telling packed pointers from checkouts."""

    def test_missing_directory(self, tmp_path, git):
        with pytest.raises(SourcePointerError):
            ThunkSource(git).read(tmp_path / "src")

    def test_checkout(self, tmp_path, git):
        (tmp_path / ".git").mkdir()

        assert ThunkSource(git).read(tmp_path) == CheckoutSource(tmp_path)

    def test_packed_pointer_written_by_create(self, tmp_path, git):
        source = ThunkSource(git)
        source.create(tmp_path / "src", POINTER)

        assert source.read(tmp_path / "src") == PackedSource(POINTER)
        assert "fetchGit" in (tmp_path / "src" / "default.nix").read_text()

    def test_pointer_without_ref(self, tmp_path, git):
        pointer = SourcePointer(url=POINTER.url, rev=POINTER.rev)
        source = ThunkSource(git)
        source.create(tmp_path, pointer)

        assert "ref" not in json.loads((tmp_path / "git.json").read_text())
        assert source.read(tmp_path) == PackedSource(pointer)

    def test_malformed_json(self, tmp_path, git):
        (tmp_path / "git.json").write_text("{not json")

        with pytest.raises(SourcePointerError):
            ThunkSource(git).read(tmp_path)

    def test_neither_checkout_nor_pointer(self, tmp_path, git):
        with pytest.raises(SourcePointerError):
            ThunkSource(git).read(tmp_path)


class TestThunkSourcePackAndUpdate:
    """Packing checkouts and advancing pointers."""

    def test_pack_replaces_checkout_with_pointer(self, tmp_path, git):
        src = tmp_path / "src"
        (src / ".git").mkdir(parents=True)
        (src / "main.nix").write_text("{}")

        pointer = ThunkSource(git).pack(src)

        assert pointer == POINTER
        assert not (src / ".git").exists()
        assert not (src / "main.nix").exists()
        assert ThunkSource(git).read(src) == PackedSource(POINTER)

    def test_update_packed_pointer_to_new_rev(self, tmp_path, git):
        source = ThunkSource(git)
        source.create(tmp_path, POINTER)
        git.ls_remote.return_value = "b" * 40

        updated = source.update(tmp_path)

        git.ls_remote.assert_called_once_with(POINTER.url, "main")
        assert updated.rev == "b" * 40
        assert source.read(tmp_path) == PackedSource(updated)

    def test_update_at_latest_rev_leaves_pointer_alone(self, tmp_path, git):
        source = ThunkSource(git)
        source.create(tmp_path, POINTER)
        git.ls_remote.return_value = POINTER.rev

        with patch.object(source, "create") as mock_create:
            assert source.update(tmp_path) == POINTER
        mock_create.assert_not_called()

    def test_update_checkout_pulls(self, tmp_path, git):
        (tmp_path / ".git").mkdir()

        assert ThunkSource(git).update(tmp_path) == POINTER
        git.pull.assert_called_once_with(tmp_path)


class TestSourceGate:
    """Resolving src into an immutable pointer before a build."""

    def test_packed_pointer_is_returned_unchanged(self, tmp_path):
        source = MagicMock()
        source.read.return_value = PackedSource(POINTER)

        assert SourceGate(source).resolve(tmp_path) == POINTER
        source.check_clean.assert_not_called()
        source.pack.assert_not_called()

    def test_dirty_checkout_is_rejected(self, tmp_path):
        source = MagicMock()
        source.read.return_value = CheckoutSource(tmp_path)
        source.check_clean.return_value = False

        with pytest.raises(DirtySourceError):
            SourceGate(source).resolve(tmp_path)
        source.check_clean.assert_called_once_with(tmp_path, True)
        source.pack.assert_not_called()

    def test_clean_checkout_is_packed(self, tmp_path):
        source = MagicMock()
        source.read.return_value = CheckoutSource(tmp_path)
        source.check_clean.return_value = True
        source.pack.return_value = POINTER
        logger = MagicMock()

        assert SourceGate(source, logger).resolve(tmp_path) == POINTER
        source.pack.assert_called_once_with(tmp_path)
        logger.log.assert_called_once()
