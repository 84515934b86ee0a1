APP_TITLE = "Promptfy"
APP_TAGLINE = "Interactive Prompt Builder"
APP_INTRO = "Choose from 3 proven methodologies to build better AI interactions"

diverge_description = """The Diverge methodology focuses on exploring alternative implementations by letting the AI propose feature designs without preconceptions. This approach helps discover fresh directions and innovative solutions before converging on a final implementation. It's particularly useful when you want to break out of conventional thinking patterns and explore the full solution space."""

tracer_bullet_description = """A tracer bullet is a minimal, but fully functional, end-to-end slice of a system's architecture. Like a tracer bullet that shows the path from gun to target, this methodology helps you build the thinnest possible vertical slice through your entire system. It validates the architecture, identifies integration points, and provides a foundation for iterative development. Perfect for proving concepts and establishing the core system flow."""

agent_planning_description = """Agent planning enables collaborative planning with AI agents through high-level specifications and mini-ADRs (Architecture Decision Records). This methodology focuses on capturing lightweight architectural decisions before coding begins, ensuring alignment between human intent and AI implementation. It's ideal for complex projects where upfront planning prevents costly refactoring and ensures the AI understands both the technical requirements and the reasoning behind architectural choices."""

diverge_closing = """=== HOW TO RESPOND ===
Do not write any code yet. Propose at least three genuinely different approaches to this problem, without anchoring on my current approach.
For each approach:
• Give it a short name and a one-paragraph summary
• Describe the key design decisions and the main components involved
• List the trade-offs: what it makes easy, what it makes hard, and where it could fail
• Estimate the relative effort compared to the other approaches

Finish with a comparison table and tell me which approach you would explore first and why. I will pick a direction before we converge on an implementation."""

tracer_bullet_closing = """=== HOW TO RESPOND ===
Treat the working code above as a tracer bullet: a thin but fully functional end-to-end slice that must keep working after every change.
• Expand it in the smallest possible increment toward the next step
• Keep every layer of the slice connected and runnable; do not stub out parts that already work
• Touch only what the increment requires and explain each change you make
• Point out any integration point that the increment exercises for the first time
• Tell me how to verify the increment end to end before we move on

Stop after this single increment and wait for my feedback."""

agent_planning_closing = """=== HOW TO RESPOND ===
Do not write any code yet. Work with me on a plan first.
1. Restate the goal as a short high-level spec: scope, main user flows and components
2. For every significant architectural choice, write a mini-ADR with Context, Decision and Consequences
3. Turn each uncertain part into concrete questions or small experiments I can run
4. Propose an implementation order broken into small, verifiable milestones

Keep the plan lightweight. Wait for my answers and my approval before starting the implementation."""
