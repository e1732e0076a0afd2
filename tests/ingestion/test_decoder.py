"""
XML Decoder Tests

AXIOM UNDER TEST:
=================
Charset resolution is explicit: the declared charset is honoured, and a
charset that cannot be resolved is a decode failure, never a guess.
"""

import codecs
import io

import pytest

from monit_collector.contracts.base import ErrorCode
from monit_collector.ingestion import DecodeError, XmlDecoder, parse_bytes


def decode(raw: bytes):
    return XmlDecoder().decode(io.BytesIO(raw))


class TestCharsetResolution:

    @pytest.mark.parametrize("declared,expected", [
        ("UTF-8", "utf-8"),
        ("ISO-8859-1", "latin-1"),
        ("windows-1252", "cp1252"),
        ("koi8-r", "koi8-r"),
    ])
    def test_declared_charset(self, declared, expected):
        raw = f'<?xml version="1.0" encoding="{declared}"?><monit/>'.encode('ascii')
        assert XmlDecoder().resolve_charset(raw) == codecs.lookup(expected).name

    def test_default_is_utf8(self):
        assert XmlDecoder().resolve_charset(b'<monit/>') == 'utf-8'

    def test_byte_order_mark_wins(self):
        raw = codecs.BOM_UTF8 + b'<?xml version="1.0" encoding="ISO-8859-1"?><monit/>'
        assert XmlDecoder().resolve_charset(raw) == 'utf-8-sig'

    def test_unknown_charset(self):
        with pytest.raises(DecodeError) as exc:
            decode(b'<?xml version="1.0" encoding="x-no-such-charset"?><monit/>')
        assert exc.value.code == ErrorCode.UNRESOLVED_CHARSET


class TestTranscoding:

    def test_latin1_document(self):
        raw = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<monit><server><localhostname>café</localhostname></server></monit>'
        ).encode('latin-1')

        document = parse_bytes(raw).value

        assert document.server.local_hostname == "café"

    def test_windows1252_document(self):
        raw = (
            '<?xml version="1.0" encoding="windows-1252"?>'
            '<monit><event><message>disk “data” full</message></event></monit>'
        ).encode('cp1252')

        assert parse_bytes(raw).value.event.message == "disk “data” full"

    def test_utf16_with_bom(self):
        raw = '<?xml version="1.0" encoding="UTF-16"?><monit id="ü"/>'.encode('utf-16')
        assert decode(raw).get('id') == "ü"

    def test_bytes_invalid_for_declared_charset(self):
        raw = b'<?xml version="1.0" encoding="UTF-8"?><monit id="\xff\xfe\xfa"/>'

        result = parse_bytes(raw)

        assert result.is_failure
        assert result.error.code == ErrorCode.UNRESOLVED_CHARSET
