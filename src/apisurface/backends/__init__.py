"""Backends for report generation from a declaration tree (API JSON, ...)."""

from .json_generator import ApiJsonGenerator, UnsupportedMemberWarning, generate_api_json, save_api_json

__all__ = ["ApiJsonGenerator", "UnsupportedMemberWarning", "generate_api_json", "save_api_json"]
