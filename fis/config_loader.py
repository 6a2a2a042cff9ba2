# fis/config_loader.py
"""
==================
TOML rule-table loader.

Builds a ready-to-use FuzzyController from a TOML rule table so that decision
variables are described as data rather than code. A table declares its input
and output variables (group index and domain), the membership functions of
each variable, and the rule base:

    name = "direct_pass_speed"
    steps = 8

    [[inputs]]
    name = "distance"
    index = 1
    min = 1.0
    max = 21.0
    [inputs.sets]
    distanceLow  = [1.0, 1.0, 1.0, 21.0]
    distanceHigh = [1.0, 21.0, 21.0, 21.0]

    [[outputs]]
    name = "speed"
    index = 1
    min = 0.81
    max = 3.31
    [outputs.sets]
    speedLow  = [0.81, 0.81, 0.81, 3.31]
    speedHigh = [0.81, 3.31, 3.31, 3.31]

    [[rule_base]]
    if = ["distanceLow"]
    then = ["speedLow"]

Shapes with 3 points are triangles, shapes with 4 points are trapezoids.
Variables may set clamp = false to skip the one-unit clamp on inputs.

TOML parsing is done via Python's built-in `tomllib` module.

Typical Usage
-------------
    from fis.config_loader import load_controller_from_file

    pass_speed = load_controller_from_file("config/direct_pass_speed.toml")
    pass_speed.decide({"distance": 11.0})   # {'speed': 2.06}
"""
import logging
import os
import tomllib
from typing import Any, Dict, List

from fis.controller import FuzzyController, Variable
from fis.defuzzifier import DEFAULT_STEPS
from fis.engine import InferenceEngine
from fis.errors import ConfigurationError
from fis.membership import MembershipKind, from_points

config_log = logging.getLogger("config")

CONFIG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config")


# ------------------------------------------------------------
# Load TOML
# ------------------------------------------------------------
def _load_toml(path: str) -> dict:
    with open(path, "rb") as f:
        return tomllib.load(f)


def _require(table: Dict[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise ConfigurationError(f"Missing '{key}' in {where}")
    return table[key]


# ------------------------------------------------------------
# Variables and their membership functions
# ------------------------------------------------------------
def _load_variables(
    engine: InferenceEngine, cfg: Dict[str, Any], section: str, kind: MembershipKind
) -> List[Variable]:
    variables = []
    for i, vcfg in enumerate(cfg.get(section, [])):
        where = f"[[{section}]] #{i + 1}"
        var = Variable(
            name=str(_require(vcfg, "name", where)),
            group_index=int(_require(vcfg, "index", where)),
            lower=float(_require(vcfg, "min", where)),
            upper=float(_require(vcfg, "max", where)),
            clamp=bool(vcfg.get("clamp", True)),
        )
        sets = vcfg.get("sets", {})
        if not sets:
            raise ConfigurationError(f"Variable '{var.name}' has no membership functions")
        for set_name, points in sets.items():
            engine.add(from_points(set_name, points, var.group_index, kind))
        variables.append(var)
    return variables


# ------------------------------------------------------------
# Controller
# ------------------------------------------------------------
def build_controller(cfg: Dict[str, Any], name: str = "") -> FuzzyController:
    """
    Builds a FuzzyController from a parsed rule table.

    Args:
        cfg (Dict[str, Any]): The parsed TOML document.
        name (str): Fallback name when the table has none.

    Raises:
        ConfigurationError: On a malformed table, shape or rule.
    """
    engine = InferenceEngine(str(cfg.get("name", name or "fuzzy")))
    inputs = _load_variables(engine, cfg, "inputs", MembershipKind.INPUT)
    outputs = _load_variables(engine, cfg, "outputs", MembershipKind.OUTPUT)

    rule_base = cfg.get("rule_base", [])
    if not rule_base:
        raise ConfigurationError(f"'{engine.name}' has an empty rule_base")
    for i, rcfg in enumerate(rule_base):
        where = f"[[rule_base]] #{i + 1}"
        engine.add_rule(list(_require(rcfg, "if", where)), list(_require(rcfg, "then", where)))

    steps = cfg.get("steps", DEFAULT_STEPS)
    config_log.info(
        "Loaded '%s': %d input sets, %d output sets, %d rules.",
        engine.name,
        len(engine.input_functions),
        len(engine.output_functions),
        len(engine.rules),
    )
    return FuzzyController(engine, inputs, outputs, steps=steps)


def load_controller_from_file(path: str) -> FuzzyController:
    """
    Loads a rule table from a TOML file.

    Relative paths that do not exist from the working directory are looked
    up in the bundled config/ directory.
    """
    if not os.path.exists(path) and not os.path.isabs(path):
        bundled = os.path.join(CONFIG_DIR, os.path.basename(path))
        if os.path.exists(bundled):
            path = bundled
    config_log.info("Loading rule table from: %s", path)
    cfg = _load_toml(path)
    default_name = os.path.splitext(os.path.basename(path))[0]
    return build_controller(cfg, name=default_name)
