from dishlens.orchestrator.contracts import DishResult


def _section(title: str, body: list[str]) -> list[str]:
    return [title, "-" * len(title), *body, ""]


def render_text(result: DishResult) -> str:
    """Plain-text rendering: one section per present, non-empty field."""
    out = [result.name, "=" * len(result.name), ""]
    if result.region:
        out += _section("Regional Information", [result.region])
    if result.ingredients:
        out += _section("Ingredients", [f"  • {item}" for item in result.ingredients])
    if result.instructions:
        out += _section("Instructions", [f"  {i}. {step}" for i, step in enumerate(result.instructions, 1)])
    if result.fun_facts:
        out += _section(f"Fun Facts about {result.name}", [f"  • {fact}" for fact in result.fun_facts])
    return "\n".join(out).rstrip() + "\n"
