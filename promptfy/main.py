import os
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Body
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from dotenv import load_dotenv

from promptfy.methodologies import (
    METHODOLOGIES,
    FieldSpec,
    FieldValidationError,
    Methodology,
    UnknownMethodology,
    get_methodology,
)
from promptfy.pages import render_home, render_methodology
from promptfy.utils import check_system_dependencies

load_dotenv()

# Environment Configuration
HOST = os.getenv("PROMPTFY_HOST", "0.0.0.0")
PORT = int(os.getenv("PROMPTFY_PORT", "8000"))
CLIPBOARD_COMMAND = os.getenv("PROMPTFY_CLIPBOARD_COMMAND", "").strip() or None

STATIC_DIR = Path(__file__).parent / "static"

app = FastAPI(title="Promptfy - Interactive Prompt Builder")
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.on_event("startup")
async def startup_event():
    """Report configuration on startup"""
    print("Starting Promptfy...")

    if CLIPBOARD_COMMAND:
        print(f"✓ Clipboard command: {CLIPBOARD_COMMAND}")
    else:
        try:
            found = check_system_dependencies()
            print(f"✓ Clipboard helpers found: {', '.join(found)}")
        except RuntimeError as e:
            print(f"⚠ {e}")

    print(f"📋 Methodologies: {', '.join(METHODOLOGIES)}")
    print("✅ Server ready!")


# Response Models
class MethodologyInfo(BaseModel):
    slug: str
    name: str
    summary: str
    description: str
    fields: List[FieldSpec]


class PromptResponse(BaseModel):
    methodology: str
    prompt: str


def _info(methodology: Methodology) -> MethodologyInfo:
    return MethodologyInfo(
        slug=methodology.slug,
        name=methodology.name,
        summary=methodology.summary,
        description=methodology.description,
        fields=methodology.fields,
    )


def _lookup(slug: str) -> Methodology:
    try:
        return get_methodology(slug)
    except UnknownMethodology:
        raise HTTPException(status_code=404, detail=f"Unknown methodology: {slug}")


@app.get("/", response_class=HTMLResponse)
async def home():
    return render_home(METHODOLOGIES.values())


def _page(methodology: Methodology):
    async def page():
        return render_methodology(methodology)

    return page


for _methodology in METHODOLOGIES.values():
    app.add_api_route(
        f"/{_methodology.slug}",
        _page(_methodology),
        methods=["GET"],
        response_class=HTMLResponse,
        name=_methodology.slug,
    )


@app.get("/api/methodologies", response_model=List[MethodologyInfo])
async def list_methodologies():
    return [_info(m) for m in METHODOLOGIES.values()]


@app.get("/api/methodologies/{slug}", response_model=MethodologyInfo)
async def read_methodology(slug: str):
    return _info(_lookup(slug))


@app.post("/api/methodologies/{slug}/prompt", response_model=PromptResponse)
async def generate_prompt(slug: str, values: Dict[str, Optional[str]] = Body(...)):
    """Validate the submitted fields and assemble the prompt"""
    methodology = _lookup(slug)

    try:
        validated = methodology.validate(values)
    except FieldValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})

    prompt = methodology.assemble(validated)
    print(f"📝 Generated {slug} prompt ({len(prompt)} chars)")
    return PromptResponse(methodology=slug, prompt=prompt)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
