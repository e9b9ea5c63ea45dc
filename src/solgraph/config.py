# solgraph/config.py
# AI-Mind (C) 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""
Configuration models for solgraph.

Options can be built in code, loaded from a YAML file, or read from the
environment (and a .env file). Colour schemes are either one of the named
presets or a full mapping in the same shape as the presets.
"""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError


class DigraphStyle(BaseModel):
    """Graph-level attributes and node/edge defaults."""

    bgcolor: Optional[str] = None
    node_attribs: dict[str, str] = Field(default_factory=dict)
    edge_attribs: dict[str, str] = Field(default_factory=dict)


class CallColors(BaseModel):
    """Edge colours by call kind.

    Attributes:
        default: External calls (member access on another contract).
        regular: Internal calls (direct-name calls on the current contract).
        this: Self calls through `this`.
    """

    default: str = "orange"
    regular: str = "green"
    this: str = "green"


class ContractStyle(BaseModel):
    bgcolor: Optional[str] = None
    color: str = "lightgray"
    fontcolor: Optional[str] = None
    style: Optional[str] = None


class ContractColors(BaseModel):
    defined: ContractStyle = Field(
        default_factory=lambda: ContractStyle(bgcolor="lightgray", color="lightgray")
    )
    undefined: ContractStyle = Field(default_factory=lambda: ContractStyle(color="lightgray"))


class ColorScheme(BaseModel):
    digraph: DigraphStyle = Field(default_factory=DigraphStyle)
    call: CallColors = Field(default_factory=CallColors)
    contract: ContractColors = Field(default_factory=ContractColors)


def default_color_scheme() -> ColorScheme:
    return ColorScheme()


def dark_color_scheme() -> ColorScheme:
    return ColorScheme(
        digraph=DigraphStyle(
            bgcolor="#2e3e56",
            node_attribs={
                "style": "filled",
                "fillcolor": "#edad56",
                "color": "#edad56",
                "penwidth": "3",
            },
            edge_attribs={
                "color": "#fcfcfc",
                "penwidth": "2",
                "fontname": "helvetica Neue Ultra Light",
            },
        ),
        call=CallColors(default="white", regular="#1bc6a6", this="#80e097"),
        contract=ContractColors(
            defined=ContractStyle(
                bgcolor="#445773", color="#445773", fontcolor="#f0f0f0", style="rounded"
            ),
            undefined=ContractStyle(
                bgcolor="#3b4b63",
                color="#e8726d",
                fontcolor="#f0f0f0",
                style="rounded,dashed",
            ),
        ),
    )


COLOR_SCHEMES = {
    "default": default_color_scheme,
    "dark": dark_color_scheme,
}


def get_color_scheme(name: str) -> ColorScheme:
    """Look up a preset colour scheme by name.

    Raises:
        ConfigurationError: If no preset has that name.
    """
    try:
        return COLOR_SCHEMES[name]()
    except KeyError:
        known = ", ".join(sorted(COLOR_SCHEMES))
        raise ConfigurationError(f"Unknown color scheme {name!r} (known: {known})") from None


def _env_flag(value: Optional[str]) -> bool:
    return (value or "false").lower() in ("1", "true", "yes")


class GraphOptions(BaseModel):
    """Options for building a contract call graph.

    Attributes:
        color_scheme: Visual style, a preset name or a full ColorScheme.
        importer: Follow import directives to discover dependency files.
        contents_in_file_path: Treat the input list as literal sources.
        libraries: Suppress call edges derived from using-for attachments.

    Example YAML:
        colorScheme: dark
        importer: true
        libraries: false
    """

    model_config = ConfigDict(populate_by_name=True)

    color_scheme: ColorScheme = Field(default_factory=ColorScheme, alias="colorScheme")
    importer: bool = False
    contents_in_file_path: bool = Field(default=False, alias="contentsInFilePath")
    libraries: bool = False

    @field_validator("color_scheme", mode="before")
    @classmethod
    def _preset_by_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return get_color_scheme(value)
        return value

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "GraphOptions":
        """Build options from SOLGRAPH_* environment variables.

        Args:
            dotenv_path: Optional .env file to load first.
        """
        if dotenv_path is not None:
            load_dotenv(dotenv_path)
        else:
            load_dotenv()

        return cls(
            color_scheme=os.getenv("SOLGRAPH_COLOR_SCHEME", "default"),
            importer=_env_flag(os.getenv("SOLGRAPH_IMPORTER")),
            libraries=_env_flag(os.getenv("SOLGRAPH_LIBRARIES")),
        )


def load_options(path: Union[str, Path]) -> GraphOptions:
    """Load GraphOptions from a YAML file.

    Raises:
        ConfigurationError: If the file is not valid YAML or not valid options.
    """
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {path}: {e}") from e

    try:
        return GraphOptions(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e
