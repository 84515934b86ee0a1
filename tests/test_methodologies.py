import pytest

from promptfy.methodologies import (
    AGENT_PLANNING,
    DIVERGE,
    METHODOLOGIES,
    SECTION_SEPARATOR,
    TRACER_BULLET,
    FieldSpec,
    FieldValidationError,
    Methodology,
    UnknownMethodology,
    ValidatedInput,
    assemble,
    get_methodology,
    validate,
)

PLANNING_GOAL = "Build a collaborative task management app with real-time updates and team workspaces"


def test_registry_has_three_methodologies_in_order():
    assert list(METHODOLOGIES) == ["diverge", "tracer-bullet", "agent-planning"]


def test_get_unknown_methodology():
    with pytest.raises(UnknownMethodology):
        get_methodology("waterfall")


@pytest.mark.parametrize(
    "methodology, field, minimum",
    [
        (DIVERGE, "problemStatement", 10),
        (TRACER_BULLET, "workingCode", 20),
        (AGENT_PLANNING, "goal", 10),
    ],
)
def test_single_required_field(methodology, field, minimum):
    assert methodology.required_field.name == field
    assert methodology.required_field.min_length == minimum
    assert all(not f.required for f in methodology.optional_fields)


def test_methodology_needs_exactly_one_required_field():
    with pytest.raises(ValueError):
        Methodology(
            slug="broken",
            name="Broken",
            summary="",
            description="",
            fields=[FieldSpec(name="a", label="A", heading="A")],
            closing="",
        )


@pytest.mark.parametrize("value", [None, "", "   \n\t "])
def test_required_field_missing(value):
    errors = DIVERGE.check({"problemStatement": value})
    assert errors == {"problemStatement": "Problem statement is required"}


def test_required_field_absent_from_input():
    assert AGENT_PLANNING.check({}) == {"goal": "Goal is required"}


def test_diverge_short_problem_statement_rejected():
    with pytest.raises(FieldValidationError) as exc:
        validate("diverge", {"problemStatement": "Too short"})

    assert list(exc.value.errors) == ["problemStatement"]
    assert exc.value.errors["problemStatement"].startswith("Please provide more details")


def test_minimum_length_counts_trimmed_text():
    # 9 characters padded with whitespace
    errors = DIVERGE.check({"problemStatement": "   123456789   "})
    assert "problemStatement" in errors
    assert DIVERGE.check({"problemStatement": "1234567890"}) == {}


def test_tracer_bullet_working_code_needs_twenty_characters():
    raw = {
        "systemDescription": "An expense tracker with a web dashboard and CSV import",
        "workingCode": "CLI reads a CSV",
    }
    assert len(raw["workingCode"]) == 15

    with pytest.raises(FieldValidationError) as exc:
        TRACER_BULLET.validate(raw)

    assert exc.value.errors == {
        "workingCode": "Please provide more details (at least 20 characters)"
    }


def test_optional_fields_have_no_constraint():
    validated = AGENT_PLANNING.validate({"goal": PLANNING_GOAL, "certainParts": "x"})
    assert validated.values["certainParts"] == "x"


def test_validate_normalizes_values():
    validated = AGENT_PLANNING.validate(
        {"goal": f"  {PLANNING_GOAL}\n", "uxPreferences": None, "unknown": "ignored"}
    )

    assert validated.methodology == "agent-planning"
    assert validated.values == {
        "goal": PLANNING_GOAL,
        "certainParts": "",
        "uncertainParts": "",
        "uxPreferences": "",
    }


def test_planning_goal_only():
    prompt = AGENT_PLANNING.build({"goal": PLANNING_GOAL})

    assert prompt == f"## Goal\n{PLANNING_GOAL}{SECTION_SEPARATOR}{AGENT_PLANNING.closing}"
    assert "## What I'm certain about" not in prompt
    assert "## What I'm uncertain about" not in prompt
    assert "## UX preferences" not in prompt


@pytest.mark.parametrize("methodology", list(METHODOLOGIES.values()), ids=list(METHODOLOGIES))
def test_only_opening_and_closing_when_optionals_empty(methodology):
    raw = {f.name: "" for f in methodology.optional_fields}
    raw[methodology.required_field.name] = "x" * methodology.required_field.min_length

    sections = methodology.build(raw).split(SECTION_SEPARATOR)

    assert sections[0] == f"## {methodology.required_field.heading}\n{'x' * methodology.required_field.min_length}"
    assert SECTION_SEPARATOR.join(sections[1:]) == methodology.closing


def test_optional_sections_follow_fixed_order():
    # Deliberately given in reverse order
    raw = {
        "explorationAreas": "Event sourcing, CRDTs",
        "constraints": "Must run offline",
        "currentApproach": "A REST API with polling",
        "problemStatement": "Keep shopping lists in sync across devices",
    }
    prompt = DIVERGE.build(raw)

    positions = [
        prompt.index("## Problem to explore"),
        prompt.index("## What I have considered so far"),
        prompt.index("## Constraints"),
        prompt.index("## Directions worth exploring"),
        prompt.index(DIVERGE.closing),
    ]
    assert positions == sorted(positions)
    for value in raw.values():
        assert value in prompt


def test_optional_section_skipped_between_others():
    prompt = TRACER_BULLET.build(
        {
            "workingCode": "A Flask endpoint that saves a form into SQLite",
            "integrationPoints": "Stripe webhooks",
        }
    )

    assert "## System overview" not in prompt
    assert "## Next increment" not in prompt
    assert "## Integration points\nStripe webhooks" in prompt
    assert SECTION_SEPARATOR * 2 not in prompt


def test_user_text_is_embedded_verbatim():
    text = "Use <b>bold</b> & keep\n  indentation\n\nand blank lines"
    prompt = AGENT_PLANNING.build({"goal": PLANNING_GOAL, "uncertainParts": text})
    assert f"## What I'm uncertain about\n{text}" in prompt


def test_assembly_is_deterministic():
    raw = {"goal": PLANNING_GOAL, "certainParts": "Postgres, React"}
    validated = validate("agent-planning", raw)

    assert assemble("agent-planning", validated) == assemble("agent-planning", validated)
    assert AGENT_PLANNING.build(raw) == AGENT_PLANNING.build(dict(raw))


def test_closing_is_identical_for_any_input():
    first = DIVERGE.build({"problemStatement": "First problem statement"})
    second = DIVERGE.build({"problemStatement": "Another one", "constraints": "None"})
    assert first.endswith(DIVERGE.closing)
    assert second.endswith(DIVERGE.closing)


def test_assemble_rejects_unvalidated_input():
    invalid = ValidatedInput(methodology="agent-planning", values={"goal": "short"})
    with pytest.raises(FieldValidationError):
        AGENT_PLANNING.assemble(invalid)


def test_assemble_rejects_input_of_other_methodology():
    validated = DIVERGE.validate({"problemStatement": "A long enough problem"})
    with pytest.raises(ValueError):
        AGENT_PLANNING.assemble(validated)


def test_validated_input_is_frozen():
    validated = DIVERGE.validate({"problemStatement": "A long enough problem"})
    with pytest.raises(Exception):
        validated.methodology = "agent-planning"


@pytest.mark.parametrize("methodology", list(METHODOLOGIES.values()), ids=list(METHODOLOGIES))
def test_examples_are_valid(methodology):
    assert methodology.check(methodology.defaults()) == {}
