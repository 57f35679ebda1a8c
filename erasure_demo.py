# erasure_demo.py
import os
import logging
import argparse
from tiling_tools import Operations, TileDataManager, TileRenderer, PENROSE, PERIODIC
from tiling_tools.Operations import DEFAULT_SETTINGS

# Configuration and initialization
CONFIG_PATH = 'config.ini'

op = Operations()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger('Erasure_Demo')


def initialize_config(path):
    if not os.path.isfile(path):
        logger.info(f"Config file {path} not found. Creating a new one...")
        op.write_config_file(path, DEFAULT_SETTINGS)
    return op.read_config_file(path)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Erase a disk of a tiling and watch it recover")
    parser.add_argument('--config', default=CONFIG_PATH, help='Path to the settings file')
    parser.add_argument('--mode', choices=[PENROSE, PERIODIC], help='Tiling to generate')
    parser.add_argument('--iterations', type=int, help='Penrose subdivision depth')
    parser.add_argument('--erase', type=float, nargs=2, metavar=('X', 'Y'),
                        help='Center of the erased disk (defaults to the patch center)')
    parser.add_argument('--radius', type=float, help='Radius of the erased disk')
    parser.add_argument('--output', default='recovered.png', help='Final frame')
    parser.add_argument('--frames', help='Directory for one frame per recovery step')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        config_data = initialize_config(args.config)
        if args.mode:
            config_data['mode'] = args.mode
        if args.iterations is not None:
            config_data['iterations'] = args.iterations

        manager = TileDataManager(config_data)
        renderer = TileRenderer(config_data['width'], config_data['height'])
        manager.generate()

        if args.erase:
            center = complex(*args.erase)
        else:
            center = complex(config_data['width'] / 2, config_data['height'] / 2)
        manager.erase(center, args.radius)
        logger.info(f"{len(manager.boundary())} boundary tiles constrain the hole")

        if args.frames:
            os.makedirs(args.frames, exist_ok=True)
            renderer.save(renderer.render_session(manager),
                          os.path.join(args.frames, 'frame_000.png'))

        for number, step in enumerate(manager.run_recovery(), start=1):
            logger.debug(f"Step {number}: tile {step.index}, {len(step.constraints)} constraints")
            if args.frames:
                image = renderer.render(manager.tiles, manager.mode, manager.erased,
                                        step.constraints, step.index)
                renderer.save(image, os.path.join(args.frames, f"frame_{number:03d}.png"))

        renderer.save(renderer.render_session(manager), args.output)
        logger.info(f"Wrote {args.output}")

    except Exception as e:
        logger.error(f"An error occurred: {e}")
        raise


if __name__ == '__main__':
    main()
