"""
Post form state and required-field validation.
"""

from dataclasses import dataclass, fields
from typing import Dict


REQUIRED_MESSAGES = {
    "title": "Title is required",
    "body": "Body is required",
    "author": "Author is required",
}


@dataclass
class PostForm:
    """Current values of the "Create New Post" form."""
    title: str = ""
    body: str = ""
    author: str = ""

    def validate(self) -> Dict[str, str]:
        """
        Check that every field is filled in.

        Returns:
            Mapping of field name to message for each empty field.
        """
        return {
            f.name: REQUIRED_MESSAGES[f.name]
            for f in fields(self)
            if not getattr(self, f.name)
        }

    def reset(self) -> None:
        """Clear all fields back to empty."""
        self.title = ""
        self.body = ""
        self.author = ""
