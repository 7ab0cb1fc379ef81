"""Tests for advanced enhancement generators."""

import pytest

from promptsmith.schemas.enhancements import (
    AdvancedEnhancements,
    ConversationFlow,
    FormatController,
    ReasoningScaffold,
    RoleEnhancement,
    SmartConstraints,
)
from promptsmith.stages.enhancement_generator import (
    generate_all_advanced_enhancements,
    generate_conversation_flow,
    generate_format_controller,
    generate_reasoning_scaffold,
    generate_role_enhancement,
    generate_smart_constraints,
)


class TestRoleEnhancement:
    """Test role enhancement text."""

    def test_expert(self):
        """Test the expert role."""
        text = generate_role_enhancement(
            RoleEnhancement(enabled=True, type="expert", expertise="supply chains")
        )
        assert text == (
            "You are an expert in supply chains.\n"
            "Draw upon deep domain knowledge and professional experience in your responses."
        )

    def test_persona(self):
        """Test the persona role."""
        text = generate_role_enhancement(
            RoleEnhancement(enabled=True, type="persona", custom_role="a grumpy editor")
        )
        assert text.startswith("Assume the role of a grumpy editor.")

    def test_perspective(self):
        """Test the perspective role."""
        text = generate_role_enhancement(
            RoleEnhancement(enabled=True, type="perspective", perspective="a first-time buyer")
        )
        assert text.startswith("Approach this from the perspective of a first-time buyer.")

    @pytest.mark.parametrize(
        "config",
        [
            RoleEnhancement(enabled=False, type="expert", expertise="x"),
            RoleEnhancement(enabled=True, type="none"),
            RoleEnhancement(enabled=True, type="expert"),
            RoleEnhancement(enabled=True, type="persona", expertise="x"),
        ],
    )
    def test_silent(self, config):
        """Test configs that render nothing."""
        assert generate_role_enhancement(config) == ""


class TestFormatController:
    """Test format controller text."""

    def test_structured_defaults_to_json(self):
        """Test that structured output defaults to JSON."""
        text = generate_format_controller(FormatController(enabled=True, type="structured"))
        assert text == (
            "Provide your response in JSON format.\nEnsure the output is valid and properly formatted."
        )

    def test_structured_yaml_with_examples(self):
        """Test YAML with example values."""
        text = generate_format_controller(
            FormatController(
                enabled=True, type="structured", structured_format="yaml", include_examples=True
            )
        )
        assert text.startswith("Provide your response in YAML format.")
        assert text.endswith("Include example values where appropriate.")

    @pytest.mark.parametrize(
        "format_type,first_line",
        [
            ("markdown", "Format your response using proper Markdown syntax."),
            ("list", "Present your response as a clear, organized list."),
            ("table", "Organize the information in a table format."),
            ("code", "Format code examples with proper syntax highlighting."),
        ],
    )
    def test_fixed_formats(self, format_type, first_line):
        """Test the two-line fixed formats."""
        text = generate_format_controller(FormatController(enabled=True, type=format_type))
        assert text.split("\n")[0] == first_line
        assert len(text.split("\n")) == 2

    def test_custom(self):
        """Test a custom format specification."""
        text = generate_format_controller(
            FormatController(enabled=True, type="custom", custom_format="Title\n---\nBody")
        )
        assert text == "Follow this format specification:\nTitle\n---\nBody"

    def test_custom_without_spec(self):
        """Test custom format with no specification."""
        assert generate_format_controller(FormatController(enabled=True, type="custom")) == ""

    def test_disabled(self):
        """Test a disabled controller."""
        assert generate_format_controller(FormatController(enabled=False, type="table")) == ""


class TestSmartConstraints:
    """Test smart constraint text."""

    def test_length_range(self):
        """Test a length with both bounds."""
        config = SmartConstraints.model_validate(
            {"length": {"enabled": True, "min": 100, "max": 300}}
        )
        assert generate_smart_constraints(config) == "Keep your response between 100 and 300 words."

    def test_length_min_only(self):
        """Test a lower bound in another unit."""
        config = SmartConstraints.model_validate(
            {"length": {"enabled": True, "min": 3, "unit": "paragraphs"}}
        )
        assert generate_smart_constraints(config) == "Your response should be at least 3 paragraphs."

    def test_length_max_only(self):
        """Test an upper bound only."""
        config = SmartConstraints.model_validate({"length": {"enabled": True, "max": 50}})
        assert generate_smart_constraints(config) == "Keep your response under 50 words."

    def test_length_without_bounds(self):
        """Test an enabled length with no bounds."""
        config = SmartConstraints.model_validate({"length": {"enabled": True}})
        assert generate_smart_constraints(config) == ""

    def test_all_blocks_in_order(self):
        """Test all six blocks in their fixed order."""
        config = SmartConstraints.model_validate(
            {
                "length": {"enabled": True, "max": 200},
                "tone": {"enabled": True, "tones": ["friendly", "concise"]},
                "audience": {"enabled": True, "target": "new hires"},
                "exclusions": {"enabled": True, "items": ["jargon"]},
                "requirements": {"enabled": True, "items": ["a summary", "next steps"]},
                "complexity": {"enabled": True, "level": "simple"},
            }
        )
        assert generate_smart_constraints(config) == "\n".join(
            [
                "Keep your response under 200 words.",
                "Maintain a friendly, concise tone throughout your response.",
                "Tailor your response for: new hires",
                "Adjust complexity, terminology, and examples accordingly.",
                "\nAvoid the following:",
                "- jargon",
                "\nEnsure your response includes:",
                "- a summary",
                "- next steps",
                "Keep explanations simple and accessible. Minimize jargon.",
            ]
        )

    def test_empty_lists_are_noops(self):
        """Test enabled blocks with nothing to say."""
        config = SmartConstraints.model_validate(
            {
                "tone": {"enabled": True, "tones": []},
                "exclusions": {"enabled": True, "items": []},
                "audience": {"enabled": True, "target": ""},
            }
        )
        assert generate_smart_constraints(config) == ""

    def test_unknown_complexity_is_noop(self):
        """Test an unknown complexity level."""
        config = SmartConstraints.model_validate(
            {"complexity": {"enabled": True, "level": "galaxy-brain"}}
        )
        assert generate_smart_constraints(config) == ""


class TestReasoningScaffold:
    """Test reasoning scaffold text."""

    def test_analysis_with_work(self):
        """Test the analysis framework with shown work."""
        text = generate_reasoning_scaffold(
            ReasoningScaffold(enabled=True, type="analysis", show_work=True)
        )
        assert text == "\n".join(
            [
                "Show your reasoning process step-by-step.",
                "Use this analytical framework:",
                "1. Identify key components and variables",
                "2. Examine relationships and dependencies",
                "3. Evaluate implications and consequences",
                "4. Synthesize insights and conclusions",
            ]
        )

    def test_decision_has_five_steps(self):
        """Test the decision matrix steps."""
        text = generate_reasoning_scaffold(ReasoningScaffold(enabled=True, type="decision"))
        assert text.startswith("Apply a decision matrix approach:")
        assert "5. Recommend the optimal choice" in text

    def test_custom_framework_appended(self):
        """Test a custom framework after the steps."""
        text = generate_reasoning_scaffold(
            ReasoningScaffold(enabled=True, type="creative", custom_framework="SCAMPER")
        )
        assert text.endswith("\n\nAdditional framework:\nSCAMPER")

    def test_none_type(self):
        """Test that no type renders nothing."""
        assert generate_reasoning_scaffold(ReasoningScaffold(enabled=True, show_work=True)) == ""


class TestConversationFlow:
    """Test conversation flow text."""

    def test_single_is_silent(self):
        """Test the default single flow."""
        assert generate_conversation_flow(ConversationFlow()) == ""

    def test_single_with_context(self):
        """Test a single flow with context."""
        text = generate_conversation_flow(ConversationFlow(context="Follow-up to last week"))
        assert text == "\nConversation context: Follow-up to last week"

    def test_clarifying_needs_permission(self):
        """Test that clarifying needs allowClarification."""
        assert generate_conversation_flow(ConversationFlow(type="clarifying")) == ""
        text = generate_conversation_flow(
            ConversationFlow(type="clarifying", allow_clarification=True)
        )
        assert text.startswith("If the request is ambiguous")

    @pytest.mark.parametrize(
        "flow,first_line",
        [
            ("iterative", "This is part of an iterative process."),
            ("multi_step", "Break down your response into clear, sequential steps."),
            ("collaborative", "Approach this as a collaborative dialogue."),
        ],
    )
    def test_flows(self, flow, first_line):
        """Test the opening line of each flow."""
        text = generate_conversation_flow(ConversationFlow(type=flow))
        assert text.startswith(first_line)

    def test_disabled(self):
        """Test a disabled flow."""
        assert generate_conversation_flow(ConversationFlow(enabled=False, type="iterative")) == ""


class TestGenerateAll:
    """Test combining all enhancements."""

    def test_defaults_render_nothing(self):
        """Test that defaults render nothing."""
        assert generate_all_advanced_enhancements(AdvancedEnhancements()) == ""

    def test_only_reasoning_enabled(self):
        """One enabled enhancement leaves no trace of the others."""
        text = generate_all_advanced_enhancements(
            AdvancedEnhancements(
                reasoning_scaffold=ReasoningScaffold(enabled=True, type="analysis", show_work=True)
            )
        )
        assert "Use this analytical framework:" in text
        assert "4. Synthesize insights and conclusions" in text
        for phrase in ("You are an expert", "Assume the role", "format", "Keep your response", "iterative"):
            assert phrase not in text

    def test_fixed_order(self):
        """Test that sections keep their order regardless of input order."""
        enhancements = AdvancedEnhancements.model_validate(
            {
                "conversationFlow": {"type": "multi_step"},
                "reasoningScaffold": {"enabled": True, "type": "decision"},
                "smartConstraints": {"tone": {"enabled": True, "tones": ["formal"]}},
                "formatController": {"enabled": True, "type": "list"},
                "roleEnhancement": {"enabled": True, "type": "expert", "expertise": "law"},
            }
        )
        text = generate_all_advanced_enhancements(enhancements)
        positions = [
            text.index("You are an expert in law."),
            text.index("Present your response as a clear, organized list."),
            text.index("Maintain a formal tone"),
            text.index("Apply a decision matrix approach:"),
            text.index("Break down your response"),
        ]
        assert positions == sorted(positions)
        assert text.count("\n\n") >= 4
