"""Category field used to group applications in the README."""

from __future__ import annotations

from dockrun.frontmatter import parse_front_matter

MIN_CATEGORY_LENGTH = 2


def validate_category(text: str, file_path: str) -> str | None:
    front_matter = parse_front_matter(text)
    if not front_matter.present:
        return None
    if front_matter.error is not None:
        return (
            f"Error parsing front matter in {file_path} for category validation: "
            f"{front_matter.error}"
        )

    category = front_matter.get("category")
    if category is None:
        return f"Missing required field 'category' in front matter of {file_path}"
    if not isinstance(category, str):
        return f"Field 'category' must be a string in front matter of {file_path}"

    value = category.strip()
    if not value:
        return f"Field 'category' cannot be empty in front matter of {file_path}"
    if len(value) < MIN_CATEGORY_LENGTH:
        return (
            f"Field 'category' must be at least {MIN_CATEGORY_LENGTH} characters long "
            f'in front matter of {file_path}. Found: "{value}"'
        )
    return None
