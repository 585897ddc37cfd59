"""
Tests for theme variables and scoped application.
"""

from plazoo_core.branding.theme import (
    PRIMARY,
    PRIMARY_FOREGROUND,
    SECONDARY,
    SECONDARY_FOREGROUND,
    StyleBag,
    ThemeScope,
    branding_variables,
)


class TestBrandingVariables:
    """Tests for computing theme variables from a store."""

    def test_primary_and_secondary(self, padaria):
        variables = branding_variables(padaria)

        assert variables == {
            PRIMARY: "0 100% 50%",
            PRIMARY_FOREGROUND: "0 0% 100%",
            SECONDARY: "60 100% 50%",
            SECONDARY_FOREGROUND: "0 0% 0%",
        }

    def test_missing_secondary(self, boutique):
        variables = branding_variables(boutique)

        assert set(variables) == {PRIMARY, PRIMARY_FOREGROUND}

    def test_no_colors(self, mercado):
        assert branding_variables(mercado) == {}

    def test_none_store(self):
        assert branding_variables(None) == {}

    def test_malformed_color_is_skipped(self):
        variables = branding_variables({"id": "s1", "primary_color": "vermelho", "secondary_color": "#000000"})

        assert PRIMARY not in variables
        assert variables[SECONDARY] == "0 0% 0%"
        assert variables[SECONDARY_FOREGROUND] == "0 0% 100%"


class TestThemeScope:
    """Tests for apply/release of theme variables."""

    def test_apply_writes_variables(self, sink, padaria):
        scope = ThemeScope(sink, padaria).apply()

        assert scope.active is True
        assert sink.get_property(PRIMARY) == "0 100% 50%"

    def test_release_removes_variables(self, sink, padaria):
        scope = ThemeScope(sink, padaria).apply()
        scope.release()

        assert scope.active is False
        assert sink.as_dict() == {}

    def test_release_restores_previous_values(self, padaria):
        sink = StyleBag({PRIMARY: "222 47% 11%", "--radius": "0.5rem"})

        with ThemeScope(sink, padaria):
            assert sink.get_property(PRIMARY) == "0 100% 50%"

        assert sink.as_dict() == {PRIMARY: "222 47% 11%", "--radius": "0.5rem"}

    def test_release_keeps_newer_writes(self, sink, padaria, boutique):
        first = ThemeScope(sink, padaria).apply()
        second = ThemeScope(sink, boutique).apply()

        first.release()

        # boutique's primary stays; padaria's secondary is removed
        assert sink.get_property(PRIMARY) == "240 100% 50%"
        assert sink.get_property(SECONDARY) is None

        second.release()
        assert sink.as_dict() == {}

    def test_out_of_order_release_restores_original_values(self, padaria, boutique):
        sink = StyleBag({PRIMARY: "222 47% 11%"})
        first = ThemeScope(sink, padaria).apply()
        second = ThemeScope(sink, boutique).apply()

        first.release()
        second.release()

        assert sink.as_dict() == {PRIMARY: "222 47% 11%"}

    def test_release_in_order(self, sink, padaria, boutique):
        first = ThemeScope(sink, padaria).apply()
        second = ThemeScope(sink, boutique).apply()

        second.release()
        assert sink.get_property(PRIMARY) == "0 100% 50%"
        assert sink.get_property(SECONDARY) == "60 100% 50%"

        first.release()
        assert sink.as_dict() == {}

    def test_middle_scope_released_first(self, sink, padaria, boutique):
        oldest = ThemeScope(sink, boutique).apply()
        middle = ThemeScope(sink, padaria).apply()
        newest = ThemeScope(sink, {"id": "s4", "primary_color": "#000000"}).apply()

        middle.release()
        newest.release()
        assert sink.as_dict() == {PRIMARY: "240 100% 50%", PRIMARY_FOREGROUND: "0 0% 100%"}

        oldest.release()
        assert sink.as_dict() == {}

    def test_apply_twice_is_noop(self, sink, padaria):
        scope = ThemeScope(sink, padaria)
        scope.apply()
        scope.apply()
        scope.release()

        assert sink.as_dict() == {}

    def test_release_without_apply(self, sink, padaria):
        ThemeScope(sink, padaria).release()
        assert sink.as_dict() == {}

    def test_separate_sinks_are_independent(self, padaria, boutique):
        sink_a = StyleBag()
        sink_b = StyleBag()

        scope_a = ThemeScope(sink_a, padaria).apply()
        ThemeScope(sink_b, boutique).apply()
        scope_a.release()

        assert sink_a.as_dict() == {}
        assert sink_b.get_property(PRIMARY) == "240 100% 50%"


def test_style_bag_to_css():
    sink = StyleBag({PRIMARY: "0 100% 50%"})

    assert sink.to_css() == ":root {\n  --store-primary: 0 100% 50%;\n}\n"
