# tests/test_rendering.py
"""Tests for variable substitution, conditionals and loops via process_template."""

import copy

import pytest

from lightbars import process_template


class TestVariableSubstitution:
    """{{name}} tokens are replaced with the string form of context values."""

    def test_substitutes_simple_variables(self):
        assert process_template("<h1>{{title}}</h1>", {"title": "Test"}) == "<h1>Test</h1>"

    def test_substitutes_several_variables(self):
        result = process_template("<h1>{{title}}</h1><p>{{content}}</p>", {"title": "T", "content": "C"})
        assert result == "<h1>T</h1><p>C</p>"

    def test_undefined_variable_is_left_literal(self):
        result = process_template("<h1>{{title}}</h1><p>{{missing}}</p>", {"title": "Test Title"})
        assert result == "<h1>Test Title</h1><p>{{missing}}</p>"

    def test_none_value_is_treated_as_undefined(self):
        assert process_template("[{{value}}]", {"value": None}) == "[{{value}}]"

    def test_empty_context(self):
        assert process_template("<h1>{{title}}</h1>", {}) == "<h1>{{title}}</h1>"
        assert process_template("<h1>{{title}}</h1>") == "<h1>{{title}}</h1>"

    def test_value_formatting(self):
        context = {"count": 3, "zero": 0, "ratio": 0.5, "up": True, "down": False, "empty": ""}
        result = process_template("{{count}} {{zero}} {{ratio}} {{up}} {{down}} [{{empty}}]", context)
        assert result == "3 0 0.5 true false []"

    def test_values_are_not_reinterpreted_as_template_syntax(self):
        context = {"comment": "{{secret}} {{#if secret}}yes{{/if}}", "secret": "s3cr3t"}
        assert process_template("<p>{{comment}}</p>", context) == "<p>{{secret}} {{#if secret}}yes{{/if}}</p>"

    def test_values_are_inserted_verbatim_without_escaping(self):
        assert process_template("{{html}}", {"html": "<b>&</b>"}) == "<b>&</b>"


class TestConditionalBlocks:
    """{{#if}} / {{#else}} / {{/if}} select a branch by truthiness."""

    def test_renders_body_when_truthy(self):
        assert process_template("{{#if show}}<p>Visible</p>{{/if}}", {"show": True}) == "<p>Visible</p>"

    def test_drops_body_when_falsy(self):
        assert process_template("{{#if show}}<p>Hidden</p>{{/if}}", {"show": False}) == ""

    def test_missing_condition_is_falsy(self):
        assert process_template("a{{#if show}}b{{/if}}c", {}) == "ac"

    def test_if_else(self):
        template = "{{#if x}}Y{{#else}}Z{{/if}}"
        assert process_template(template, {"x": False}) == "Z"
        assert process_template(template, {"x": True}) == "Y"

    @pytest.mark.parametrize("value", [0, 0.0, "", [], {}, None, False])
    def test_falsy_values(self, value):
        assert process_template("{{#if v}}T{{#else}}F{{/if}}", {"v": value}) == "F"

    @pytest.mark.parametrize("value", [1, -1, "0", "false", [0], {"a": 1}, True])
    def test_truthy_values(self, value):
        assert process_template("{{#if v}}T{{#else}}F{{/if}}", {"v": value}) == "T"

    def test_nested_conditions(self):
        template = "{{#if a}}{{#if b}}X{{/if}}{{/if}}"
        assert process_template(template, {"a": True, "b": True}) == "X"
        assert process_template(template, {"a": True, "b": False}) == ""
        assert process_template(template, {"a": False, "b": True}) == ""

    def test_else_belongs_to_its_own_block(self):
        template = "{{#if a}}{{#if b}}AB{{#else}}A{{/if}}{{#else}}none{{/if}}"
        assert process_template(template, {"a": True, "b": True}) == "AB"
        assert process_template(template, {"a": True, "b": False}) == "A"
        assert process_template(template, {"a": False, "b": True}) == "none"

    def test_sibling_blocks(self):
        template = "{{#if a}}1{{/if}}-{{#if b}}2{{#else}}3{{/if}}-{{#if a}}4{{/if}}"
        assert process_template(template, {"a": True, "b": False}) == "1-3-4"


class TestLoopBlocks:
    """{{#each}} renders its body once per sequence element."""

    def test_renders_body_per_item(self):
        template = "{{#each items}}<li>{{name}}</li>{{/each}}"
        context = {"items": [{"name": "A"}, {"name": "B"}]}
        assert process_template(template, context) == "<li>A</li><li>B</li>"

    def test_empty_sequence(self):
        assert process_template("{{#each items}}<li>{{name}}</li>{{/each}}", {"items": []}) == ""

    @pytest.mark.parametrize("value", ["not an array", 42, {"name": "x"}, None, True])
    def test_non_sequence_values_render_nothing(self, value):
        assert process_template("[{{#each items}}<li>{{name}}</li>{{/each}}]", {"items": value}) == "[]"

    def test_missing_sequence_renders_nothing(self):
        assert process_template("[{{#each items}}x{{/each}}]", {}) == "[]"

    def test_tuple_is_a_sequence(self):
        assert process_template("{{#each items}}{{item}};{{/each}}", {"items": ("a", "b")}) == "a;b;"

    def test_parent_variables_visible_in_loop(self):
        template = "{{#each items}}<li>{{title}}: {{name}}</li>{{/each}}"
        context = {"title": "Service", "items": [{"name": "API"}, {"name": "Database"}]}
        assert process_template(template, context) == "<li>Service: API</li><li>Service: Database</li>"

    def test_element_fields_shadow_outer_names_only_inside_loop(self):
        template = "{{title}}|{{#each items}}{{title}}|{{/each}}{{title}}"
        context = {"title": "Outer", "items": [{"title": "Inner"}, {}]}
        assert process_template(template, context) == "Outer|Inner|Outer|Outer"

    def test_item_binding_for_scalar_elements(self):
        assert process_template("{{#each tags}}[{{item}}]{{/each}}", {"tags": ["a", "b", 3]}) == "[a][b][3]"

    def test_nested_loops(self):
        template = "{{#each groups}}{{name}}:{{#each members}}{{name}},{{/each}};{{/each}}"
        context = {"groups": [
            {"name": "g1", "members": [{"name": "a"}, {"name": "b"}]},
            {"name": "g2", "members": []},
        ]}
        assert process_template(template, context) == "g1:a,b,;g2:;"

    def test_conditional_inside_loop_uses_element_scope(self):
        template = "{{#each services}}{{#if down}}!{{name}}{{#else}}{{name}}{{/if}} {{/each}}"
        context = {"down": True, "services": [{"name": "api", "down": False}, {"name": "db", "down": True}]}
        assert process_template(template, context) == "api !db "

    def test_loop_inside_conditional(self):
        template = "{{#if has}}<ul>{{#each items}}<li>{{item}}</li>{{/each}}</ul>{{#else}}none{{/if}}"
        assert process_template(template, {"has": True, "items": ["x"]}) == "<ul><li>x</li></ul>"
        assert process_template(template, {"has": False, "items": ["x"]}) == "none"

    def test_does_not_mutate_caller_context(self):
        context = {"name": "outer", "items": [{"name": "a", "tags": ["t"]}, {"name": "b"}]}
        snapshot = copy.deepcopy(context)
        process_template("{{#each items}}{{name}}{{#each tags}}{{item}}{{/each}}{{/each}}{{name}}", context)
        assert context == snapshot


class TestMixedTemplates:
    """Whole-document templates combining all constructs."""

    def test_status_page_fragment(self):
        template = """
        <h1>{{title}}</h1>
        {{#if hasServices}}
          <ul>
            {{#each services}}
              <li class="{{status}}">{{name}}: {{description}}</li>
            {{/each}}
          </ul>
        {{#else}}
          <p>No services available</p>
        {{/if}}
      """
        context = {
            "title": "Service Status",
            "hasServices": True,
            "services": [
                {"name": "API", "description": "REST API", "status": "operational"},
                {"name": "DB", "description": "Database", "status": "degraded"},
            ],
        }
        result = process_template(template, context)
        assert "<h1>Service Status</h1>" in result
        assert '<li class="operational">API: REST API</li>' in result
        assert '<li class="degraded">DB: Database</li>' in result
        assert "No services available" not in result

    @pytest.mark.parametrize("template", [
        "",
        "plain text",
        "<html><body>\n  no tags { here } \n</body></html>",
        "{{ spaced }} {{this.name}} {{#unless x}} x }}{{",
        "{single} {{#if}} {{/}} {{#each}}",
    ])
    @pytest.mark.parametrize("context", [{}, {"spaced": "S", "x": True, "name": "N"}])
    def test_templates_without_tags_are_unchanged(self, template, context):
        assert process_template(template, context) == template
