from html import escape
from typing import Iterable

from promptfy.methodologies import FieldSpec, Methodology
from promptfy.prompts import APP_INTRO, APP_TAGLINE, APP_TITLE


def _layout(title: str, description: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{escape(title)}</title>
  <meta name="description" content="{escape(description)}">
  <link rel="stylesheet" href="/static/styles.css">
</head>
<body>
  <main class="container">
{body}
  </main>
  <script src="/static/app.js" defer></script>
</body>
</html>
"""


def render_home(methodologies: Iterable[Methodology]) -> str:
    cards = "\n".join(
        f"""      <a class="card methodology-card" href="/{m.slug}" data-methodology="{m.slug}">
        <h2>{escape(m.name)}</h2>
        <p>{escape(m.summary)}</p>
      </a>"""
        for m in methodologies
    )

    body = f"""    <header class="hero">
      <h1>{APP_TITLE}</h1>
      <p class="tagline">{APP_TAGLINE}</p>
      <p>{APP_INTRO}</p>
    </header>
    <nav class="grid">
{cards}
    </nav>"""

    return _layout(
        f"{APP_TITLE} - {APP_TAGLINE}",
        "Build better prompts with our 3 proven methodologies",
        body,
    )


def _render_field(spec: FieldSpec) -> str:
    marker = ' <span class="required">*</span>' if spec.required else ""
    constraints = f' required data-min-length="{spec.min_length}"' if spec.required else ""

    return f"""        <div class="field">
          <label for="{spec.name}">{escape(spec.label)}{marker}</label>
          <textarea id="{spec.name}" name="{spec.name}" rows="4" placeholder="{escape(spec.placeholder)}"{constraints}>{escape(spec.example)}</textarea>
          <p class="field-error" id="{spec.name}-error" role="alert" hidden></p>
        </div>"""


def render_methodology(methodology: Methodology) -> str:
    fields = "\n".join(_render_field(spec) for spec in methodology.fields)

    body = f"""    <header class="page-header">
      <h1>{escape(methodology.name)}</h1>
      <a class="back" href="/">Back to Home</a>
    </header>
    <section class="card">
      <p class="description">{escape(methodology.description)}</p>
    </section>
    <section class="card">
      <h2>Build Your {escape(methodology.name)} Prompt</h2>
      <form id="prompt-form" data-endpoint="/api/methodologies/{methodology.slug}/prompt" novalidate>
{fields}
        <p class="form-error" id="form-error" role="alert" hidden></p>
        <button type="submit">Generate prompt</button>
      </form>
    </section>
    <section class="card" id="output" hidden>
      <h2>Your prompt</h2>
      <textarea id="generated-prompt" rows="16" readonly></textarea>
      <button type="button" id="copy-button" data-state="idle">Copy to clipboard</button>
    </section>"""

    return _layout(f"{methodology.name} - {APP_TITLE}", methodology.summary, body)
