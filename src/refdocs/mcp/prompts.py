"""MCP prompt definitions: explain_concept, show_example, compare_approaches.

Each prompt has a ``<name>_impl`` function testable without the mcp package.
Comma-separated list arguments are split here, since MCP prompt arguments
arrive as strings.
"""

from __future__ import annotations

from typing import Any

# Common concepts -> likely documentation identifiers.
_SUGGESTED_RESOURCES: dict[str, list[str]] = {
    "aggregate": ["document://aggregates", "document://domain-driven-design"],
    "projection": ["document://projections", "document://read-models"],
    "event": ["document://events", "document://event-sourcing"],
    "command": ["document://commands", "document://cqrs"],
    "query": ["document://queries", "document://cqrs"],
    "repository": ["document://repositories", "document://data-access"],
    "api": ["document://api", "document://rest-api"],
}


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def suggested_resources(concept: str) -> list[str]:
    """Documentation identifiers likely to cover *concept*."""
    lowered = concept.lower()
    for key, uris in _SUGGESTED_RESOURCES.items():
        if key in lowered:
            return list(uris)
    return [f"document://{lowered}"]


# ---------------------------------------------------------------------------
# Prompt implementations (testable without mcp)
# ---------------------------------------------------------------------------


def explain_concept_impl(
    concept: str,
    *,
    library: str,
    include_examples: bool = True,
    difficulty: str | None = None,
) -> str:
    """Ask for a structured explanation of *concept*."""
    steps = [
        f"1. A clear definition of what {concept} is",
        f"2. When and why to use {concept}",
        "3. Key benefits and considerations",
        "4. Best practices and anti-patterns to avoid",
    ]
    if include_examples:
        steps.append(f"5. Code examples demonstrating {concept}")

    prompt = f'Please explain the concept of "{concept}" in {library}.\n\nI need:\n'
    prompt += "\n".join(steps) + "\n"
    if difficulty:
        prompt += f"\nPlease tailor the explanation for a {difficulty}-level developer.\n"

    resources = ", ".join(suggested_resources(concept))
    prompt += f"""
Start from these documentation resources: {resources}.
Use `get_code_location` to find the code implementing {concept} and
`get_tests_for_code` to find tests that exercise it.
If there are multiple related concepts, explain how they relate to each other."""
    return prompt


def show_example_impl(
    topic: str,
    *,
    library: str,
    framework: str | None = None,
    difficulty: str | None = None,
    with_tests: bool = True,
) -> str:
    """Ask for worked code examples on *topic*."""
    prompt = f"""Please show me code examples for "{topic}" in {library}.

Requirements:
- Read the relevant document:// resources to find code examples
- Show complete, working examples with proper context
"""
    if framework:
        prompt += f"- Filter for {framework} framework\n"
    if difficulty:
        prompt += f"- Focus on {difficulty}-level examples\n"
    if with_tests:
        prompt += (
            "- Include test references (testFile and testMethod) from `get_tests_for_code` "
            "to show the examples are verified\n"
        )

    prompt += """
For each example, provide:
1. The code with syntax highlighting
2. Explanation of what it does
3. Link to the documentation page (document:// URI)
4. Test file reference if available
5. Required packages

If multiple examples are found, show the most relevant ones first."""
    return prompt


def compare_approaches_impl(
    topic: str,
    *,
    library: str,
    approaches: list[str] | None = None,
    criteria: list[str] | None = None,
) -> str:
    """Ask for a side-by-side comparison of implementation approaches."""
    prompt = f"""Please compare different approaches for implementing "{topic}" in {library}.

Steps:
1. Use `list_docs_by_category` and the document:// resources to find documentation about {topic}
2. Use `get_code_location` to locate code showing different implementations
"""
    if approaches:
        prompt += f"3. Focus on these specific approaches: {', '.join(approaches)}\n"
    else:
        prompt += "3. Identify the common implementation patterns\n"

    prompt += "4. Create a comparison showing:\n"
    if criteria:
        prompt += "".join(f"   - {criterion}\n" for criterion in criteria)
    else:
        prompt += (
            "   - Pros and cons of each approach\n"
            "   - Use cases where each is most appropriate\n"
            "   - Performance considerations\n"
            "   - Code complexity and maintainability\n"
            "   - Test coverage and testability\n"
        )

    prompt += """
5. Provide code examples for each approach
6. Make a recommendation based on common scenarios

Present the comparison in a clear, tabular format if possible."""
    return prompt


# ---------------------------------------------------------------------------
# Registration: wraps _impl functions with FastMCP decorators
# ---------------------------------------------------------------------------


def register_prompts(server: Any, library: str) -> None:
    """Register the three MCP prompts on the FastMCP server."""

    @server.prompt()  # type: ignore[untyped-decorator]
    def explain_concept(
        concept: str,
        include_examples: bool = True,
        difficulty: str | None = None,
    ) -> str:
        """Detailed explanation of a concept with examples and best practices."""
        return explain_concept_impl(
            concept, library=library, include_examples=include_examples, difficulty=difficulty
        )

    @server.prompt()  # type: ignore[untyped-decorator]
    def show_example(
        topic: str,
        framework: str | None = None,
        difficulty: str | None = None,
        with_tests: bool = True,
    ) -> str:
        """Code examples for a topic, with test references."""
        return show_example_impl(
            topic,
            library=library,
            framework=framework,
            difficulty=difficulty,
            with_tests=with_tests,
        )

    @server.prompt()  # type: ignore[untyped-decorator]
    def compare_approaches(
        topic: str,
        approaches: str | None = None,
        criteria: str | None = None,
    ) -> str:
        """Compare implementation approaches (comma-separated lists)."""
        return compare_approaches_impl(
            topic,
            library=library,
            approaches=_split_csv(approaches) or None,
            criteria=_split_csv(criteria) or None,
        )
