import os
import yaml
import argparse
from pathlib import Path

DEFAULT_CONFIG_PATH = Path(os.getenv("LPREG_CONFIG", "lpreg_config.yaml"))

DEFAULTS = {
    "device": "cpu",
    "dtype": "float32",
    "seed": 997,
}

def load_yaml_config(path: str = None) -> dict:
    """Load configuration from a YAML file."""
    cfg_path = Path(path or os.getenv("LPREG_CONFIG", DEFAULT_CONFIG_PATH))
    if not cfg_path.exists():
        print(f"[LpReg] No config found at {cfg_path}. Using defaults.")
        return {}
    with open(cfg_path, "r") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config file {cfg_path} must contain a mapping, got {type(cfg).__name__}")
    return cfg

class _OverrideParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting the host program."""
    def error(self, message):
        raise ValueError(f"Invalid LpReg config override: {message}")

def parse_cli_args(argv) -> dict:
    """Parse CLI overrides (used for runtime config tweaking)."""
    # add_help/allow_abbrev off: host programs (pytest, scripts) own argv
    parser = _OverrideParser(description="LpReg Config Override",
                             add_help=False, allow_abbrev=False)

    parser.add_argument("--config", type=str, help="Path to YAML config file")
    parser.add_argument("--device", type=str, choices=["cpu", "gpu"], help="Device to use")
    parser.add_argument("--dtype", type=str, choices=["float16", "float32", "float64"], help="Floating point precision")
    parser.add_argument("--seed", type=int, help="Random seed")

    args, _ = parser.parse_known_args(argv)

    return {key: value for key, value in vars(args).items() if value is not None}

def merge_configs(base: dict, override: dict) -> dict:
    """Merge CLI overrides into YAML base config (CLI wins)."""
    final = base.copy()
    final.update(override)
    return final

def load_config(argv=None) -> dict:
    """
    Main config loader: defaults < YAML < CLI overrides.

    CLI overrides are only parsed from an explicit `argv`; the import-time
    CONFIG never reads the host program's sys.argv.
    """
    cli = parse_cli_args(argv) if argv is not None else {}
    yaml_cfg = load_yaml_config(cli.get("config"))
    return merge_configs(merge_configs(DEFAULTS, yaml_cfg), cli)

# === The global CONFIG dict you import elsewhere ===
CONFIG = load_config()
