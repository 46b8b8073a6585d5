"""Tests for hashing and identifier naming."""

import pytest

from silkcss.config import NamingMode, SilkConfig
from silkcss.model.declaration import Declaration, SelectorContext
from silkcss.naming import (
    HASH_BITS,
    Namer,
    atom_key,
    class_name,
    decode_hash,
    from_base36,
    hash32,
    to_base36,
)


# ---------------------------------------------------------------------------
# hash32 / base36
# ---------------------------------------------------------------------------


class TestHash32:
    def test_deterministic(self):
        assert hash32("padding\x1f1rem\x1f") == hash32("padding\x1f1rem\x1f")

    def test_fits_in_32_bits(self):
        for text in ("", "a", "color\x1fred\x1f", "ü" * 50):
            assert 0 <= hash32(text) < 2**HASH_BITS

    def test_empty_string(self):
        assert hash32("") == 0

    def test_small_changes_change_hash(self):
        assert hash32("color:red") != hash32("color:rea")
        assert hash32("ab") != hash32("ba")

    def test_unicode_hashed_as_utf8(self):
        assert hash32("é") != hash32("e")


class TestBase36:
    @pytest.mark.parametrize("number, text", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
    def test_encode(self, number, text):
        assert to_base36(number) == text
        assert from_base36(text) == number

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base36(-1)

    @pytest.mark.parametrize("text", ["", "A", "1-2"])
    def test_decode_rejects_non_base36(self, text):
        with pytest.raises(ValueError):
            from_base36(text)


# ---------------------------------------------------------------------------
# Namer
# ---------------------------------------------------------------------------

PADDING = Declaration("padding", "1rem")


class TestVerboseNames:
    def test_format(self):
        name = Namer().name(PADDING)
        encoded = to_base36(hash32(atom_key(PADDING)))
        assert name == f"silk_padding_1rem_{encoded}"

    def test_value_fragment_sanitized_and_truncated(self):
        name = Namer().name(Declaration("width", "calc(100% - 2rem)"))
        assert name.startswith("silk_width_calc1002re_")

    def test_custom_property_name(self):
        assert Namer().name(Declaration("--brand", "#fff")).startswith("silk_brand_fff_")

    def test_custom_prefix(self):
        assert Namer(prefix="ui").name(PADDING).startswith("ui_padding_")


class TestCompactNames:
    def test_format(self):
        name = Namer(NamingMode.COMPACT, "s").name(PADDING)
        assert name == "s" + to_base36(hash32(PADDING.atom_key))

    def test_empty_prefix_guards_leading_digit(self):
        namer = Namer(NamingMode.COMPACT, "")
        for n in range(50):
            decl = Declaration("width", f"{n}px")
            encoded = to_base36(hash32(decl.atom_key))
            expected = "_" + encoded if encoded[0].isdigit() else encoded
            assert namer.name(decl) == expected
            assert not namer.name(decl)[0].isdigit()


class TestDecoding:
    def test_cross_mode_equality(self):
        verbose = Namer(NamingMode.VERBOSE, "silk")
        compact = Namer(NamingMode.COMPACT, "s")
        for decl in (PADDING, Declaration("color", "red", SelectorContext(pseudos=(":hover",)))):
            assert verbose.decode(verbose.name(decl)) == compact.decode(compact.name(decl))
            assert verbose.decode(verbose.name(decl)) == hash32(decl.atom_key)

    def test_decode_hash_with_default_prefix(self):
        name = class_name(PADDING, SilkConfig(naming=NamingMode.COMPACT))
        assert decode_hash(name, NamingMode.COMPACT) == hash32(PADDING.atom_key)

    def test_decode_guarded_empty_prefix(self):
        namer = Namer(NamingMode.COMPACT, "")
        for n in range(20):
            decl = Declaration("top", f"{n}px")
            assert namer.decode(namer.name(decl)) == hash32(decl.atom_key)

    def test_decode_guarded_digit_prefix(self):
        namer = Namer(NamingMode.COMPACT, "9x")
        name = namer.name(PADDING)
        assert name.startswith("_9x")
        assert namer.decode(name) == hash32(PADDING.atom_key)
        assert decode_hash(name, NamingMode.COMPACT, "9x") == hash32(PADDING.atom_key)

    def test_decode_underscore_prefix(self):
        namer = Namer(NamingMode.COMPACT, "_s")
        assert namer.decode(namer.name(PADDING)) == hash32(PADDING.atom_key)

    def test_wrong_prefix(self):
        with pytest.raises(ValueError, match="prefix"):
            decode_hash("x123", NamingMode.COMPACT, "s")

    def test_verbose_without_separator(self):
        with pytest.raises(ValueError):
            decode_hash("nounderscores", NamingMode.VERBOSE)


class TestPurity:
    def test_same_declaration_same_name_across_instances(self):
        assert Namer().name(PADDING) == Namer().name(Declaration("padding", "1rem"))

    def test_context_changes_name(self):
        hover = Declaration("padding", "1rem", SelectorContext(pseudos=(":hover",)))
        assert Namer().name(PADDING) != Namer().name(hover)

    def test_class_name_uses_config(self):
        config = SilkConfig(naming=NamingMode.COMPACT, prefix="z")
        assert class_name(PADDING, config).startswith("z")
        assert class_name(PADDING).startswith("silk_padding_")
