"""Tests for yes/no flags and image URL helpers."""
import pytest

from core.flags import YesNo, is_loose_true, parse_csv_flag, parse_yes_no
from core.images import (
    attachment_url,
    company_avatar_url,
    decode_data_uri,
    founder_avatar_url,
    is_data_uri,
    is_hosted_url,
    strip_scheme,
)


class TestYesNo:
    """Tests for startup flag parsing."""

    @pytest.mark.parametrize('value', ['yes', 'Yes', 'YES', ' yes '])
    def test_yes_variants(self, value):
        assert parse_yes_no(value) is YesNo.YES
        assert bool(parse_yes_no(value)) is True

    def test_no(self):
        assert parse_yes_no('No') is YesNo.NO
        assert bool(parse_yes_no('No')) is False

    @pytest.mark.parametrize('value', [None, '', 'maybe', True, 1, 'true'])
    def test_anything_else_is_unknown(self, value):
        """Startup flags only accept the literal 'yes'."""
        assert parse_yes_no(value) is YesNo.UNKNOWN
        assert bool(parse_yes_no(value)) is False

    def test_csv_flag_accepts_true(self):
        assert parse_csv_flag('TRUE') is YesNo.YES
        assert parse_csv_flag('yes') is YesNo.YES
        assert parse_csv_flag('false') is YesNo.UNKNOWN


class TestLooseTrue:
    """Tests for the partner checkbox policy."""

    @pytest.mark.parametrize('value', [True, 1, 'true', 'TRUE', 'True'])
    def test_truthy_values(self, value):
        assert is_loose_true(value) is True

    @pytest.mark.parametrize('value', [False, 0, 2, None, '', 'yes', '1', 'false'])
    def test_other_values(self, value):
        assert is_loose_true(value) is False


class TestImages:
    """Tests for image URL helpers."""

    def test_attachment_url_uses_first_signed_path(self):
        value = [{'signedPath': 'dltemp/a.png'}, {'signedPath': 'dltemp/b.png'}]

        assert attachment_url(value, 'https://nocodb.test/') == 'https://nocodb.test/dltemp/a.png'

    @pytest.mark.parametrize('value', [None, '', 'https://x.test/logo.png', [], ['x'], [{'path': 'p'}], {'signedPath': 's'}])
    def test_attachment_url_missing(self, value):
        assert attachment_url(value, 'https://nocodb.test') is None

    def test_avatar_urls_encode_name(self):
        assert 'name=Jane%20Doe&size=80&background=4f46e5' in founder_avatar_url('Jane Doe')
        url = company_avatar_url('R&D GmbH')
        assert 'name=R%26D%20GmbH' in url
        assert url.endswith('&bold=true&font-size=0.4')

    def test_decode_data_uri(self):
        mime, content, extension = decode_data_uri('data:image/jpeg;base64,aGVsbG8=')

        assert mime == 'image/jpeg'
        assert content == b'hello'
        assert extension == 'jpeg'

    def test_decode_svg_extension(self):
        _, _, extension = decode_data_uri('data:image/svg+xml;base64,PHN2Zy8+')

        assert extension == 'svg'

    @pytest.mark.parametrize('value', ['data:image/png;base64,', 'data:image/png;base64,@@@', 'not a uri', 'data:image/png'])
    def test_decode_malformed(self, value):
        with pytest.raises(ValueError):
            decode_data_uri(value)

    def test_uri_kinds(self):
        assert is_data_uri('data:image/png;base64,AAAA')
        assert not is_data_uri('data:text/plain;base64,AAAA')
        assert is_hosted_url('https://nocodb.test/dltemp/a.png')
        assert is_hosted_url('/FounderPics/jane.png')
        assert not is_hosted_url('')
        assert not is_hosted_url(None)

    def test_strip_scheme(self):
        assert strip_scheme('https://acme.io') == 'acme.io'
        assert strip_scheme('http://beta.dev/path') == 'beta.dev/path'
        assert strip_scheme(None) == ''
