"""Serialization module: plans and profiles to and from camelCase JSON."""

from triathlon_engine.serialization.plan_json import (
    plan_from_dict,
    plan_from_json_string,
    plan_to_dict,
    plan_to_json_string,
    profile_from_dict,
    profile_to_dict,
    race_config_from_dict,
    race_config_to_dict,
)

__all__ = [
    "plan_from_dict",
    "plan_from_json_string",
    "plan_to_dict",
    "plan_to_json_string",
    "profile_from_dict",
    "profile_to_dict",
    "race_config_from_dict",
    "race_config_to_dict",
]
