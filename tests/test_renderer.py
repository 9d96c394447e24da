"""Tests for the prompt renderer."""

import jinja2
import pytest

from engine import PromptRenderer


@pytest.fixture
def renderer():
    return PromptRenderer()


class TestPromptRenderer:

    def test_substitutes_fields(self, renderer):
        assert renderer.render("Signal for {{ coinName }}", {"coinName": "Dogecoin"}) == "Signal for Dogecoin"

    def test_absent_field_renders_empty(self, renderer):
        assert renderer.render("Style: {{ tradingStyle }}.", {}) == "Style: ."

    def test_none_renders_empty(self, renderer):
        assert renderer.render("[{{ note }}]", {"note": None}) == "[]"

    def test_attribute_of_absent_field(self, renderer):
        assert renderer.render("[{{ targets.stopLoss }}]", {}) == "[]"

    def test_lists_are_comma_joined(self, renderer):
        assert renderer.render("Watch {{ coins }}", {"coins": ["DOGE", "PEPE"]}) == "Watch DOGE, PEPE"

    def test_conditional_sections(self, renderer):
        template = "Coin {{ coinName }}{% if currentPriceUSD %} at {{ currentPriceUSD }} USD{% endif %}."
        assert renderer.render(template, {"coinName": "PEPE"}) == "Coin PEPE."
        assert renderer.render(template, {"coinName": "PEPE", "currentPriceUSD": 0.5}) == "Coin PEPE at 0.5 USD."

    def test_no_html_escaping(self, renderer):
        assert renderer.render("{{ q }}", {"q": "Is <DOGE> & co worth it?"}) == "Is <DOGE> & co worth it?"

    def test_deterministic(self, renderer):
        template = "{{ a }} {{ b }}"
        record = {"a": 1, "b": "two"}
        assert renderer.render(template, record) == renderer.render(template, record)

    def test_does_not_mutate_input(self, renderer):
        record = {"coinName": "Dogecoin"}
        renderer.render("{% set coinName = 'x' %}{{ coinName }}", record)
        assert record == {"coinName": "Dogecoin"}

    def test_broken_template_raises(self, renderer):
        with pytest.raises(jinja2.TemplateError):
            renderer.render("{% if coinName %}unterminated", {"coinName": "DOGE"})
