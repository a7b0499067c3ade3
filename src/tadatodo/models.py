"""Pydantic models for the tada-todo manifest."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class ConfigFormat(StrEnum):
    """Serialization formats for the manifest file."""

    JSON = "json"
    MSGPACK = "msgpack"
    AUTO = "auto"


class SavedFile(BaseModel):
    """A TODO file tracked by the manifest."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    dir_relative_to_conf: str = Field(alias="dirRelativeToConf")
    content: str
    hash: str | None = None

    def key(self) -> tuple[str, str]:
        """Identity of the entry within a manifest: (name, directory)."""
        return (self.name, self.dir_relative_to_conf)


class TodoConfig(BaseModel):
    """The manifest recording how TODO files are created and which ones are tracked."""

    model_config = ConfigDict(populate_by_name=True)

    new_file_name: str = Field(default="TODO.md", alias="newFileName")
    human_readable: bool = Field(default=False, alias="humanReadable")
    save_in_config: bool = Field(default=False, alias="saveInConfig")
    saved_files: list[SavedFile] | None = Field(default=None, alias="savedFiles")

    def to_document(self) -> dict[str, object]:
        """Dump using the on-disk camelCase keys, omitting unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
