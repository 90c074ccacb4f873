"""Tests for single binding set specialization."""

import io

import pytest

from gospecialize.exceptions import MalformedSourceError, MissingBindingError
from gospecialize.generator import Specializer
from gospecialize.naming import NameCache
from gospecialize.source import TemplateSource


class TestGenerateSpecific:
    """Test one fragment per binding set."""

    def setup_method(self):
        self.specializer = Specializer()

    def test_no_placeholder_residue(self, list_source):
        fragment = self.specializer.generate_specific(list_source, {"KeyType": "int"})

        assert "KeyType" not in fragment
        assert "generic.Type" not in fragment

    def test_specialized_declarations(self, list_source):
        lines = self.specializer.generate_specific(list_source, {"KeyType": "int"}).splitlines()

        assert "\tKey int" in lines
        assert "func NewIntList ( key int ) * List {" in lines
        assert "func newIntHolder ( ) * List {" in lines
        # untouched lines keep their original text
        assert "\tfmt.Println(key)" in lines

    def test_comments_kept_above_their_declaration(self, list_source):
        lines = self.specializer.generate_specific(list_source, {"KeyType": "int"}).splitlines()

        index = lines.index("type List struct {")
        assert lines[index - 1] == "// List holds one key."

    def test_missing_binding_produces_nothing(self, list_source):
        with pytest.raises(MissingBindingError) as exc_info:
            self.specializer.generate_specific(list_source, {"ValueType": "int"})

        assert exc_info.value.generic_type == "KeyType"

    def test_malformed_template(self):
        source = TemplateSource.from_text("package p\n\nfunc f() {\n", "bad.go")

        with pytest.raises(MalformedSourceError) as exc_info:
            self.specializer.generate_specific(source, {})

        assert exc_info.value.filename == "bad.go"

    def test_invalid_utf8_is_malformed(self):
        source = TemplateSource(io.BytesIO(b'package p\n\nvar s = "\xff"\n'), "bad.go")

        with pytest.raises(MalformedSourceError) as exc_info:
            self.specializer.generate_specific(source, {})

        assert exc_info.value.filename == "bad.go"
        assert "illegal UTF-8" in exc_info.value.diagnostic

    def test_multiple_placeholders_and_tags(self, pair_source):
        fragment = self.specializer.generate_specific(
            pair_source, {"KeyType": "*big.Int", "ValueType": "float64"}
        )

        assert "type BigIntFloat64Pair struct {" in fragment
        assert '\tKey *big.Int `json:"big_int"`' in fragment
        assert '\tValue float64 `db:"float_64_value"`' in fragment
        assert "generic" not in fragment.replace("github.com/cheekybits/genny/generic", "")

    def test_source_rewound_for_each_call(self, list_source):
        first = self.specializer.generate_specific(list_source, {"KeyType": "int"})
        second = self.specializer.generate_specific(list_source, {"KeyType": "int"})

        assert first == second

    def test_io_errors_propagate(self):
        class BrokenStream(io.StringIO):
            def seek(self, *args):
                raise OSError("device gone")

        source = TemplateSource(BrokenStream("package p\n"), "p.go")

        with pytest.raises(OSError, match="device gone"):
            self.specializer.generate_specific(source, {})


class TestDeterminism:
    """Output depends only on template and bindings."""

    def test_shared_cache_does_not_change_output(self, list_source, pair_source):
        names = NameCache()
        specializer = Specializer(names=names)

        before = specializer.generate_specific(list_source, {"KeyType": "int"})
        specializer.generate_specific(pair_source, {"KeyType": "int:Other", "ValueType": "uint8"})
        specializer.generate_specific(list_source, {"KeyType": "string"})
        after = specializer.generate_specific(list_source, {"KeyType": "int"})

        assert before == after
        assert len(names) > 0

    def test_sessions_do_not_share_caches(self):
        assert Specializer().names is not Specializer().names
