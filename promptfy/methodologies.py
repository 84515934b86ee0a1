from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from promptfy.prompts import (
    agent_planning_closing,
    agent_planning_description,
    diverge_closing,
    diverge_description,
    tracer_bullet_closing,
    tracer_bullet_description,
)

SECTION_SEPARATOR = "\n\n"


class FieldValidationError(ValueError):
    """Raised when a form input fails the required / minimum length checks"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{name}: {msg}" for name, msg in self.errors.items()))


class UnknownMethodology(KeyError):
    pass


class FieldSpec(BaseModel):
    name: str
    label: str
    heading: str
    placeholder: str = ""
    example: str = ""
    required: bool = False
    min_length: int = Field(default=0, ge=0)


class ValidatedInput(BaseModel):
    """Normalized field values that passed validation for one methodology"""

    model_config = ConfigDict(frozen=True)

    methodology: str
    values: Dict[str, str]


class Methodology:
    """One prompt-building methodology: its form fields and its template"""

    def __init__(
        self,
        slug: str,
        name: str,
        summary: str,
        description: str,
        fields: List[FieldSpec],
        closing: str,
    ):
        required = [f for f in fields if f.required]
        if len(required) != 1:
            raise ValueError(f"{slug} must declare exactly one required field, got {len(required)}")

        self.slug = slug
        self.name = name
        self.summary = summary
        self.description = description
        self.fields = fields
        self.closing = closing

    @property
    def required_field(self) -> FieldSpec:
        return next(f for f in self.fields if f.required)

    @property
    def optional_fields(self) -> List[FieldSpec]:
        return [f for f in self.fields if not f.required]

    def defaults(self) -> Dict[str, str]:
        """Example values used to pre-populate the form"""
        return {f.name: f.example for f in self.fields}

    def normalize(self, raw: Mapping[str, Optional[str]]) -> Dict[str, str]:
        # Unknown keys are dropped, missing ones count as empty
        return {f.name: (raw.get(f.name) or "").strip() for f in self.fields}

    def check(self, raw: Mapping[str, Optional[str]]) -> Dict[str, str]:
        """Return a mapping of field name to error message (empty when valid)"""
        values = self.normalize(raw)
        errors = {}

        for spec in self.fields:
            if not spec.required:
                continue
            value = values[spec.name]
            if not value:
                errors[spec.name] = f"{spec.label} is required"
            elif len(value) < spec.min_length:
                errors[spec.name] = (
                    f"Please provide more details (at least {spec.min_length} characters)"
                )

        return errors

    def validate(self, raw: Mapping[str, Optional[str]]) -> ValidatedInput:
        errors = self.check(raw)
        if errors:
            raise FieldValidationError(errors)
        return ValidatedInput(methodology=self.slug, values=self.normalize(raw))

    def assemble(self, validated: ValidatedInput) -> str:
        """Build the prompt text from validated input.

        The opening section comes from the required field, optional sections
        follow in declaration order only when non-empty, and the closing
        instructions are always last.
        """
        if validated.methodology != self.slug:
            raise ValueError(
                f"Input was validated for {validated.methodology!r}, not {self.slug!r}"
            )
        errors = self.check(validated.values)
        if errors:
            raise FieldValidationError(errors)

        values = validated.values
        opening = self.required_field
        sections = [_section(opening.heading, values[opening.name])]

        for spec in self.optional_fields:
            value = values.get(spec.name, "")
            if value:
                sections.append(_section(spec.heading, value))

        sections.append(self.closing)
        return SECTION_SEPARATOR.join(sections)

    def build(self, raw: Mapping[str, Optional[str]]) -> str:
        return self.assemble(self.validate(raw))


def _section(heading: str, body: str) -> str:
    return f"## {heading}\n{body}"


DIVERGE = Methodology(
    slug="diverge",
    name="Diverge",
    summary=(
        "Exploring alternative implementations by letting the AI propose feature designs "
        "without preconceptions, to discover fresh directions before converging"
    ),
    description=diverge_description,
    fields=[
        FieldSpec(
            name="problemStatement",
            label="Problem statement",
            heading="Problem to explore",
            placeholder="What problem or feature do you want to explore?",
            example="Design an onboarding flow that gets new users to their first successful project in under five minutes",
            required=True,
            min_length=10,
        ),
        FieldSpec(
            name="currentApproach",
            label="Current approach",
            heading="What I have considered so far",
            placeholder="How would you solve it today? The AI will try not to anchor on it.",
        ),
        FieldSpec(
            name="constraints",
            label="Constraints",
            heading="Constraints",
            placeholder="Technical, product or time constraints every option must respect",
        ),
        FieldSpec(
            name="explorationAreas",
            label="Exploration areas",
            heading="Directions worth exploring",
            placeholder="Areas, technologies or ideas you would like the AI to consider",
        ),
    ],
    closing=diverge_closing,
)

TRACER_BULLET = Methodology(
    slug="tracer-bullet",
    name="Tracer bullet",
    summary="A minimal, but fully functional, end-to-end slice of a system's architecture",
    description=tracer_bullet_description,
    fields=[
        FieldSpec(
            name="workingCode",
            label="Working code description",
            heading="Current working slice",
            placeholder="Describe the minimal end-to-end code that already works",
            example="A CLI that reads a CSV of expenses, stores them in SQLite and prints a monthly total",
            required=True,
            min_length=20,
        ),
        FieldSpec(
            name="systemDescription",
            label="System description",
            heading="System overview",
            placeholder="What is the whole system supposed to become?",
        ),
        FieldSpec(
            name="nextIncrement",
            label="Next increment",
            heading="Next increment",
            placeholder="The next small piece of functionality to grow the slice with",
        ),
        FieldSpec(
            name="integrationPoints",
            label="Integration points",
            heading="Integration points",
            placeholder="External services, APIs or layers the slice must connect to",
        ),
    ],
    closing=tracer_bullet_closing,
)

AGENT_PLANNING = Methodology(
    slug="agent-planning",
    name="Agent planning",
    summary=(
        "Collaborative planning with agents through high-level specs and mini-ADRs. "
        "TL;DR: lightweight architectural decisions captured before coding begins."
    ),
    description=agent_planning_description,
    fields=[
        FieldSpec(
            name="goal",
            label="Goal",
            heading="Goal",
            placeholder="What do you want to build?",
            example="Build a collaborative task management app with real-time updates and team workspaces",
            required=True,
            min_length=10,
        ),
        FieldSpec(
            name="certainParts",
            label="What you're certain about",
            heading="What I'm certain about",
            placeholder="Decisions that are already made: stack, constraints, must-haves",
        ),
        FieldSpec(
            name="uncertainParts",
            label="What you're uncertain about",
            heading="What I'm uncertain about",
            placeholder="Open questions the plan should resolve",
        ),
        FieldSpec(
            name="uxPreferences",
            label="UX preferences",
            heading="UX preferences",
            placeholder="How should it look and feel for the people using it?",
        ),
    ],
    closing=agent_planning_closing,
)

METHODOLOGIES: Dict[str, Methodology] = {
    m.slug: m for m in (DIVERGE, TRACER_BULLET, AGENT_PLANNING)
}


def get_methodology(slug: str) -> Methodology:
    try:
        return METHODOLOGIES[slug]
    except KeyError:
        raise UnknownMethodology(slug) from None


def validate(slug: str, raw: Mapping[str, Optional[str]]) -> ValidatedInput:
    return get_methodology(slug).validate(raw)


def assemble(slug: str, validated: ValidatedInput) -> str:
    return get_methodology(slug).assemble(validated)
