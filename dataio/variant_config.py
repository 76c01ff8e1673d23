"""
Visualizer variant presets.

A variant bundles the adjustable bounds and defaults of the visualizer: slider
ranges, the initial correlation and sample size, the display range the sample
is rescaled into, and where the baseline line sits before a fit is requested.
Variants are stored as YAML files in ``config/variants/``.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Dict, Any, Optional
import logging
import math
import yaml

logger = logging.getLogger(__name__)

BASELINE_MODES = ("mean_y", "zero")


class VariantConfigError(ValueError):
    """Raised when a variant file is missing, unreadable, or inconsistent."""
    pass


@dataclass
class VariantConfig:
    """
    Adjustable bounds and defaults for one visualizer variant.

    The correlation step only affects the slider granularity; the model
    accepts any value inside [correlation_min, correlation_max].
    """
    name: str = "default"
    description: str = ""
    initial_correlation: float = 0.0
    initial_sample_size: int = 30
    sample_size_min: int = 10
    sample_size_max: int = 200
    correlation_min: float = -1.0
    correlation_max: float = 1.0
    correlation_step: float = 0.01
    range_min: float = 0.0
    range_max: float = 10.0
    baseline_line_mode: str = "mean_y"

    def __post_init__(self):
        self.baseline_line_mode = str(self.baseline_line_mode or "mean_y").strip().lower()

    def validate(self) -> "VariantConfig":
        """Check internal consistency; returns self so calls can be chained."""
        if self.baseline_line_mode not in BASELINE_MODES:
            raise VariantConfigError(
                f"baseline_line_mode must be one of {BASELINE_MODES}, got '{self.baseline_line_mode}'"
            )
        for key in ("initial_correlation", "correlation_min", "correlation_max",
                    "correlation_step", "range_min", "range_max"):
            value = getattr(self, key)
            if not math.isfinite(value):
                raise VariantConfigError(f"{key} must be finite, got {value}")
        if not -1.0 <= self.correlation_min <= self.correlation_max <= 1.0:
            raise VariantConfigError(
                f"correlation bounds must satisfy -1 <= min <= max <= 1 "
                f"(got {self.correlation_min}, {self.correlation_max})"
            )
        if not self.correlation_min <= self.initial_correlation <= self.correlation_max:
            raise VariantConfigError(f"initial_correlation {self.initial_correlation} is outside its bounds")
        if self.correlation_step <= 0:
            raise VariantConfigError(f"correlation_step must be positive, got {self.correlation_step}")
        if self.sample_size_min < 1 or self.sample_size_min > self.sample_size_max:
            raise VariantConfigError(
                f"sample size bounds must satisfy 1 <= min <= max "
                f"(got {self.sample_size_min}, {self.sample_size_max})"
            )
        if not self.sample_size_min <= self.initial_sample_size <= self.sample_size_max:
            raise VariantConfigError(f"initial_sample_size {self.initial_sample_size} is outside its bounds")
        if not self.range_min < self.range_max:
            raise VariantConfigError(f"range_min must be below range_max (got {self.range_min}, {self.range_max})")
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: Optional[str] = None) -> "VariantConfig":
        """Build a validated config from a parsed YAML mapping."""
        if not isinstance(data, dict):
            raise VariantConfigError(f"Variant definition must be a mapping, got {type(data).__name__}")

        defaults = cls()
        kwargs: Dict[str, Any] = {"name": str(data.get("name") or name or defaults.name)}
        kwargs["description"] = str(data.get("description") or "")

        float_keys = ("initial_correlation", "correlation_min", "correlation_max",
                      "correlation_step", "range_min", "range_max")
        int_keys = ("initial_sample_size", "sample_size_min", "sample_size_max")

        # Accept the nested layout used by the shipped files as well as flat keys
        flat = dict(data)
        for section in ("correlation", "sample_size", "display_range"):
            block = data.get(section)
            if isinstance(block, dict):
                prefix = {"correlation": "correlation_", "sample_size": "sample_size_",
                          "display_range": "range_"}[section]
                for k, v in block.items():
                    if k == "initial":
                        flat[f"initial_{section}"] = v
                    else:
                        flat[f"{prefix}{k}"] = v

        for key in float_keys:
            if key in flat:
                try:
                    kwargs[key] = float(flat[key])
                except (TypeError, ValueError):
                    raise VariantConfigError(f"{key} must be a number, got {flat[key]!r}") from None
        for key in int_keys:
            if key in flat:
                value = flat[key]
                try:
                    whole = not isinstance(value, bool) and float(value).is_integer()
                except (TypeError, ValueError):
                    whole = False
                if not whole:
                    raise VariantConfigError(f"{key} must be an integer, got {value!r}")
                kwargs[key] = int(float(value))
        if "baseline_line_mode" in flat:
            kwargs["baseline_line_mode"] = flat["baseline_line_mode"]

        return cls(**kwargs).validate()


def _default_variants_folder() -> Path:
    repo_root = Path(__file__).resolve().parent.parent
    return repo_root / "config" / "variants"


def load_variant_config(yaml_path: Path) -> VariantConfig:
    """
    Load a variant preset from a YAML file.

    Args:
        yaml_path: Path to the variant YAML file

    Returns:
        VariantConfig object

    Raises:
        VariantConfigError: If the file is missing, is not valid YAML, or
            describes an inconsistent variant
    """
    yaml_path = Path(yaml_path)
    if not yaml_path.is_file():
        raise VariantConfigError(f"Variant file not found: {yaml_path}")
    try:
        with open(yaml_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise VariantConfigError(f"Could not parse {yaml_path.name}: {e}") from e
    return VariantConfig.from_dict(data or {}, name=yaml_path.stem)


def list_available_variants(folder: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    List variant presets available in the variants folder.

    Returns:
        List of dicts with 'name', 'path', and 'description' keys.
        Unreadable files are skipped with a warning.
    """
    folder = Path(folder) if folder is not None else _default_variants_folder()
    if not folder.exists():
        return []

    variants = []
    for yaml_file in sorted(folder.glob("*.yaml")):
        try:
            cfg = load_variant_config(yaml_file)
        except VariantConfigError as e:
            logger.warning(f"Skipping variant {yaml_file.name}: {e}")
            continue
        variants.append({
            'name': cfg.name,
            'path': str(yaml_file),
            'description': cfg.description,
        })
    return variants


def load_variant(name: str, folder: Optional[Path] = None) -> VariantConfig:
    """Load a variant by its ``name`` field or file stem."""
    folder = Path(folder) if folder is not None else _default_variants_folder()
    candidate = folder / f"{name}.yaml"
    if candidate.is_file():
        return load_variant_config(candidate)
    for entry in list_available_variants(folder):
        if entry['name'] == name:
            return load_variant_config(Path(entry['path']))
    raise VariantConfigError(f"No variant named '{name}' in {folder}")
