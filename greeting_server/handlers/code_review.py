"""Code review prompt template."""

from greeting_server.types import PromptMessage

REVIEW_GUIDELINES = """\
## Review guidelines

Analyse the code in detail, focusing on the following areas:

### 1. Code quality
- Overall structure and design patterns
- Clarity of the code and how well it conveys intent
- Complexity (cyclomatic complexity, nesting depth)

### 2. Bugs and potential issues
- Obvious bugs or logic errors
- Missing edge case handling
- Missing null/undefined checks
- Type-related problems
- Insufficient exception handling

### 3. Performance
- Unnecessary computation or iteration
- Potential memory leaks
- Inefficient algorithms or data structures
- Caching opportunities
- Improvements to asynchronous code

### 4. Security
- Missing input validation
- Injection, XSS and similar threats
- Exposure of sensitive information
- Missing authorization checks
- Unsafe dependencies

### 5. Style and readability
- Naming conventions
- Formatting and consistency
- Appropriate comments (too many or too few)
- Magic numbers and strings
- Function and class size

### 6. Best practices
- Language idioms
- SOLID principles
- DRY (Don't Repeat Yourself)
- Appropriate design patterns
- Testability

### 7. Maintainability
- Extensibility
- Dependency management
- Coupling and cohesion
- Need for refactoring

## Review format

For each area:
- ✅ **Strengths**: highlight what is done well
- ⚠️ **Needs improvement**: describe the problem and why it matters
- 💡 **Suggestion**: give concrete improved code
- 🔍 **Further considerations**: longer-term suggestions

Finish with an **overall assessment** and **improvements ordered by priority**."""


def build_review_prompt(
    code: str, language: str | None = None, focus: str | None = None
) -> str:
    """Assemble the review instruction document.

    Deterministic: the same inputs always produce the same text.
    """
    header = "Please perform a detailed code review of the following code."
    if language:
        header += f"\n**Programming language**: {language}"
    if focus:
        header += f"\n**Review focus**: {focus}"

    return (
        f"{header}\n\n"
        "## Code to review\n"
        f"```{language or ''}\n"
        f"{code}\n"
        "```\n\n"
        f"{REVIEW_GUIDELINES}"
    )


def code_review(
    code: str, language: str | None = None, focus: str | None = None
) -> list[PromptMessage]:
    """Produce the code review prompt as a single user message."""
    return [PromptMessage(role="user", text=build_review_prompt(code, language, focus))]


__all__ = ["REVIEW_GUIDELINES", "build_review_prompt", "code_review"]
