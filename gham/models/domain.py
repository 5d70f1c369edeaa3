"""Domain models for contexts and repository assignments.

These are the records persisted in the configuration document. The secret
token of a context is deliberately not a field here: it lives only in the
secret store, keyed by the context name.

Example:
    >>> from gham.models.domain import AppConfig, Context, RepoAssignment
    >>> config = AppConfig(
    ...     contexts=[Context(name="work", username="alice")],
    ...     repositories=[RepoAssignment(path="/src/project", context_name="work")],
    ... )
    >>> config.contexts[0].username
    'alice'
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Username recorded for contexts created without one. Git hosts accept it as
# the user part of token-authenticated HTTPS URLs, and it never becomes a
# commit author name.
DEFAULT_USERNAME = "x-access-token"


class Context(BaseModel):
    """A named Git identity.

    Attributes:
        name: Unique, non-empty context name
        username: Commit username (default applied at creation time)
        email: Commit email (optional)
    """

    name: str
    username: str = ""
    email: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the context name is not empty.

        Args:
            v: The value to validate

        Returns:
            Stripped value

        Raises:
            ValueError: If value is empty or whitespace
        """
        if not v or not v.strip():
            raise ValueError("Context name must not be empty")
        return v.strip()

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_optional(cls, v: object) -> str:
        # YAML renders "email:" with no value as null
        return "" if v is None else str(v).strip()

    @property
    def has_custom_username(self) -> bool:
        """True when the username should override the commit author name."""
        return bool(self.username) and self.username != DEFAULT_USERNAME


class RepoAssignment(BaseModel):
    """Binding of a repository root to a context.

    Attributes:
        path: Absolute, OS-native path of the repository root
        context_name: Name of the assigned context (``contextName`` on disk)
    """

    model_config = ConfigDict(populate_by_name=True)

    path: str
    context_name: str = Field(alias="contextName")


class AppConfig(BaseModel):
    """Whole configuration document.

    Attributes:
        contexts: Configured contexts, in insertion order
        repositories: Repository root assignments
    """

    contexts: list[Context] = Field(default_factory=list)
    repositories: list[RepoAssignment] = Field(default_factory=list)

    def to_document(self) -> dict[str, list[dict[str, str]]]:
        """Return the plain mapping written to the YAML file.

        Empty optional context fields are omitted to keep the file readable.
        """
        return {
            "contexts": [ctx.model_dump(exclude_defaults=True) for ctx in self.contexts],
            "repositories": [repo.model_dump(by_alias=True) for repo in self.repositories],
        }
