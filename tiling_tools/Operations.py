# tiling_tools/Operations.py
import configparser
import logging

from tiling_tools.Recovery import MODES

SECTION = 'Settings'

DEFAULT_SETTINGS = {
    'mode': 'penrose',
    'width': 1100,
    'height': 500,
    'iterations': 8,
    'tile_size': 25.0,
    'erase_radius': 50.0,
    'shift': [8.0, 6.0],
    'half_tile_tolerance': 2.0,
    'neighbor_tolerance': 1.0,
    'penrose_margin': 30.0,
    'periodic_margin': 50.0,
}

INT_KEYS = ('width', 'height', 'iterations')
FLOAT_KEYS = ('tile_size', 'erase_radius', 'half_tile_tolerance', 'neighbor_tolerance',
              'penrose_margin', 'periodic_margin')
TOLERANCE_KEYS = ('half_tile_tolerance', 'neighbor_tolerance')


class Operations:
    def __init__(self):
        self.config = configparser.ConfigParser()
        self.logger = logging.getLogger('Operations')

    def format_value(self, value):
        if isinstance(value, (list, tuple)):
            # Sanitize list input by filtering out empty strings and joining correctly
            return ', '.join(str(v).strip() for v in value if str(v).strip())
        return str(value)

    def write_config_file(self, config_path, settings=None):
        """Write a complete [Settings] section, filling gaps from the defaults."""
        merged = dict(DEFAULT_SETTINGS)
        if settings:
            merged.update(settings)
        self.config = configparser.ConfigParser()
        self.config[SECTION] = {key: self.format_value(value) for key, value in merged.items()}
        with open(config_path, 'w') as configfile:
            self.config.write(configfile)
        self.logger.debug(f"Wrote configuration to {config_path}")

    def read_config_file(self, config_path):
        # Fresh parser per read so keys from an earlier file do not leak in
        self.config = configparser.ConfigParser()
        self.config.read(config_path)
        if not self.config.has_section(SECTION):
            self.logger.warning(f"No [{SECTION}] section in {config_path}, using defaults")
            return dict(DEFAULT_SETTINGS)

        section = self.config[SECTION]
        settings = dict(DEFAULT_SETTINGS)
        try:
            for key in INT_KEYS:
                if key in section:
                    settings[key] = section.getint(key)
            for key in FLOAT_KEYS:
                if key in section:
                    settings[key] = section.getfloat(key)
            if 'shift' in section:
                shift = [float(x.strip()) for x in section.get('shift').split(',')]
                if len(shift) != 2:
                    raise ValueError(f"shift needs two values, got {len(shift)}")
                settings['shift'] = shift
            for key in TOLERANCE_KEYS:
                if settings[key] <= 0:
                    raise ValueError(f"{key} must be positive, got {settings[key]}")
        except ValueError as e:
            raise ValueError(f"Invalid setting in {config_path}: {e}") from e

        mode = section.get('mode', DEFAULT_SETTINGS['mode']).strip()
        if mode not in MODES:
            raise ValueError(f"Invalid mode in {config_path}: {mode!r}")
        settings['mode'] = mode
        return settings

    def update_config_file(self, config_path, **kwargs):
        self.config = configparser.ConfigParser()
        self.config.read(config_path)
        if not self.config.has_section(SECTION):
            self.config.add_section(SECTION)
        for key, value in kwargs.items():
            self.config.set(SECTION, key, self.format_value(value))
        with open(config_path, 'w') as configfile:
            self.config.write(configfile)


def shift_offset(settings):
    """The configured recovery shift as a point."""
    x, y = settings['shift']
    return complex(x, y)
