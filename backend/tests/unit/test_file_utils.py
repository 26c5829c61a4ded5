"""
File area helper unit tests (path utils, text sanitizing, FileService)
"""

import io
import threading
from unittest.mock import patch

import pytest
from werkzeug.datastructures import FileStorage

from services.file_service import FileService
from utils.path_utils import (
    get_extension, open_stored_file, is_allowed_extension, resolve_within,
    stored_name_from_url,
)
from utils.text_sanitize import clean_text_field, parse_list_field

ALLOWED = {'glb', 'obj', 'fbx'}


class TestExtensions:

    @pytest.mark.parametrize('filename, expected', [
        ('chair.glb', 'glb'),
        ('Chair.GLB', 'glb'),
        ('archive.tar.obj', 'obj'),
        ('no_extension', ''),
        ('', ''),
        (None, ''),
    ])
    def test_get_extension(self, filename, expected):
        assert get_extension(filename) == expected

    def test_is_allowed_extension(self):
        assert is_allowed_extension('desk.FBX', ALLOWED)
        assert is_allowed_extension('desk.obj', {'.obj'})
        assert not is_allowed_extension('malware.exe', ALLOWED)
        assert not is_allowed_extension('glb', ALLOWED)


class TestStoredFilename:

    def _claim(self, name, directory, timestamp):
        stored_name, handle = open_stored_file(name, directory, timestamp)
        handle.close()
        return stored_name

    def test_timestamp_prefix(self, tmp_path):
        assert self._claim('chair.glb', tmp_path, 1700000000000) == '1700000000000-chair.glb'
        assert (tmp_path / '1700000000000-chair.glb').is_file()

    def test_collision_bumps_timestamp(self, tmp_path):
        (tmp_path / '1700000000000-chair.glb').write_bytes(b'first')
        (tmp_path / '1700000000001-chair.glb').write_bytes(b'second')

        assert self._claim('chair.glb', tmp_path, 1700000000000) == '1700000000002-chair.glb'
        assert (tmp_path / '1700000000000-chair.glb').read_bytes() == b'first'

    def test_unsafe_characters_are_replaced(self, tmp_path):
        assert self._claim('office chair v2.glb', tmp_path, 1) == '1-office_chair_v2.glb'

    def test_non_ascii_name_falls_back(self, tmp_path):
        assert self._claim('椅子.glb', tmp_path, 1) == '1-model.glb'

    def test_stored_name_from_url(self):
        assert stored_name_from_url('/uploads/1-chair.glb') == '1-chair.glb'
        assert stored_name_from_url('/uploads/') is None
        assert stored_name_from_url('/uploads/../secret') is None
        assert stored_name_from_url('/files/1-chair.glb') is None
        assert stored_name_from_url(None) is None

    def test_resolve_within(self, tmp_path):
        assert resolve_within(tmp_path, '1-chair.glb') == (tmp_path / '1-chair.glb').resolve()
        assert resolve_within(tmp_path, '../outside.glb') is None
        assert resolve_within(tmp_path, '..') is None


class TestTextFields:

    def test_clean_text_field_defaults(self):
        assert clean_text_field(None, 'Unnamed Model') == 'Unnamed Model'
        assert clean_text_field('   ', 'Unnamed Model') == 'Unnamed Model'
        assert clean_text_field('  Desk \x00', 'Unnamed Model') == 'Desk'

    def test_clean_text_field_truncates(self):
        assert clean_text_field('abcdef', 'x', max_chars=3) == 'abc'

    @pytest.mark.parametrize('raw, expected', [
        (None, []),
        ('', []),
        (' , ,', []),
        ('oak', ['oak']),
        ('oak, steel ,glass', ['oak', 'steel', 'glass']),
        ('default', ['default']),
    ])
    def test_parse_list_field(self, raw, expected):
        assert parse_list_field(raw) == expected


class TestFileService:

    def _storage(self, name='chair.glb', content=b'glTF'):
        return FileStorage(stream=io.BytesIO(content), filename=name)

    def test_save_and_locate(self, tmp_path):
        service = FileService(str(tmp_path / 'uploads'))

        stored_name, size = service.save_model_file(self._storage(content=b'12345'))

        assert size == 5
        assert service.file_exists(stored_name)
        assert service.url_exists(service.get_file_url(stored_name))
        assert service.folder_exists()

    def test_delete_file(self, tmp_path):
        service = FileService(str(tmp_path))
        stored_name, _ = service.save_model_file(self._storage())

        assert service.delete_file(stored_name) is True
        assert service.delete_file(stored_name) is False
        assert not service.file_exists(stored_name)

    def test_missing_file(self, tmp_path):
        service = FileService(str(tmp_path))

        assert not service.file_exists('1-none.glb')
        assert not service.url_exists('/uploads/1-none.glb')
        assert not service.file_exists(None)

    def test_concurrent_same_name_uploads_get_separate_files(self, tmp_path):
        """Two uploads of chair.glb in the same millisecond keep both files"""
        barrier = threading.Barrier(2, timeout=5)

        class SlowFileStorage(FileStorage):
            # Both uploads have claimed a name before either writes
            def save(self, dst, buffer_size=16384):
                barrier.wait()
                super().save(dst, buffer_size)

        service = FileService(str(tmp_path))
        results, errors = [], []

        def upload(content):
            try:
                storage = SlowFileStorage(stream=io.BytesIO(content), filename='chair.glb')
                results.append((service.save_model_file(storage)[0], content))
            except Exception as e:
                errors.append(e)

        with patch('utils.path_utils.time.time', return_value=1700000000.0):
            threads = [threading.Thread(target=upload, args=(c,)) for c in (b'first', b'second')]
            for t in threads:
                t.start()
            for t in threads:
                t.join(10)

        assert errors == []
        names = sorted(name for name, _ in results)
        assert names == ['1700000000000-chair.glb', '1700000000001-chair.glb']
        for name, content in results:
            assert (tmp_path / name).read_bytes() == content
