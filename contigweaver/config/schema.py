"""
ContigWeaver v0.1.0

Configuration schema for ContigWeaver.

Defines all available configuration parameters with defaults and validation.

Author: ContigWeaver Development Team
License: MIT
"""

from typing import Dict, Any, Optional, List
from pathlib import Path
import copy
import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be parsed."""
    pass


# Default configuration values
DEFAULT_CONFIG = {
    # ========================================================================
    # Assembly
    # ========================================================================
    'assembly': {
        'kmer_size': 4,
        # Ceiling on enumerated paths per run (None = unbounded)
        'max_paths': 100000,
    },

    # ========================================================================
    # Streaming
    # ========================================================================
    'streaming': {
        'enabled': False,  # Print contigs as they are discovered
        'queue_size': 0,  # 0 = unbounded channel
    },

    # ========================================================================
    # Read simulation
    # ========================================================================
    'simulation': {
        'genome_length': 40,
        'num_reads': 20,
        'min_read_length': 8,
        'noise_reads': 0,
        'random_seed': None,
    },

    # ========================================================================
    # Output
    # ========================================================================
    'output': {
        'format': 'fasta',  # 'fasta', 'text'
        'line_width': 80,  # 0 = no wrapping

        # Logging
        'logging': {
            'level': 'INFO',  # 'DEBUG', 'INFO', 'WARNING', 'ERROR'
            'log_file': None,
        },
    },
}

VALID_OUTPUT_FORMATS = ['fasta', 'text']
VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from file or return defaults.

    Args:
        config_path: Path to YAML config file (None = use defaults)

    Returns:
        Configuration dictionary

    Raises:
        ConfigValidationError: If the file is not valid YAML or not a mapping
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path:
        config_path = Path(config_path)
        if config_path.exists():
            try:
                with open(config_path) as f:
                    user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigValidationError(
                    f"Invalid YAML in config file {config_path}: {e}"
                )

            if user_config is None:
                return config
            if not isinstance(user_config, dict):
                raise ConfigValidationError(
                    f"Config file {config_path} must contain a mapping, "
                    f"got {type(user_config).__name__}"
                )

            # Deep merge user config into defaults
            config = _deep_merge(config, user_config)

    return config


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Override dictionary

    Returns:
        Merged dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def merge_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply command-line overrides.

    Keys use dotted notation (e.g. 'assembly.kmer_size'); None values are
    skipped so unset CLI options keep the file/default value.
    """
    result = copy.deepcopy(config)
    for key, value in overrides.items():
        if value is None:
            continue
        keys = key.split('.')
        target = result
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value
    return result


def save_config_template(output_path: Path, template: str = 'default'):
    """
    Save a configuration template to file.

    Args:
        output_path: Output file path
        template: Template type ('default', 'small', 'dense')
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    # Customize for specific templates
    if template == 'small':
        config['assembly']['kmer_size'] = 3
        config['simulation']['genome_length'] = 20
        config['simulation']['num_reads'] = 8
        config['simulation']['min_read_length'] = 5

    elif template == 'dense':
        # Repetitive inputs: keep the ceiling tight and stream results
        config['assembly']['max_paths'] = 10000
        config['streaming']['enabled'] = True
        config['simulation']['noise_reads'] = 5

    elif template != 'default':
        raise ValueError(f"Unknown config template: {template}")

    with open(output_path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration dictionary.

    Args:
        config: Configuration to validate

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    assembly = config.get('assembly', {})
    k = assembly.get('kmer_size')
    if not isinstance(k, int) or isinstance(k, bool) or k < 2:
        errors.append(f"Invalid assembly.kmer_size: {k!r} (must be an integer >= 2)")

    max_paths = assembly.get('max_paths')
    if max_paths is not None and (not isinstance(max_paths, int) or max_paths < 0):
        errors.append(f"Invalid assembly.max_paths: {max_paths!r} (must be null or >= 0)")

    queue_size = config.get('streaming', {}).get('queue_size', 0)
    if not isinstance(queue_size, int) or queue_size < 0:
        errors.append(f"Invalid streaming.queue_size: {queue_size!r}")

    # Simulation bounds
    sim = config.get('simulation', {})
    for key in ('genome_length', 'num_reads', 'min_read_length', 'noise_reads'):
        value = sim.get(key, 0)
        if not isinstance(value, int) or value < 0:
            errors.append(f"Invalid simulation.{key}: {value!r}")
    if isinstance(sim.get('min_read_length'), int) and isinstance(sim.get('genome_length'), int):
        if sim['min_read_length'] >= sim['genome_length']:
            errors.append("simulation.min_read_length must be shorter than simulation.genome_length")

    output = config.get('output', {})
    if output.get('format') not in VALID_OUTPUT_FORMATS:
        errors.append(f"Invalid output.format: {output.get('format')!r}")

    level = output.get('logging', {}).get('level', 'INFO')
    if str(level).upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid output.logging.level: {level!r}")

    return errors
