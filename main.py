# main.py
"""
Main entry point for the constellation animation.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and builds the simulation context and particle field.
4. Runs the display-driven frame loop until the window is closed.
5. Handles clean shutdown.
"""
import cProfile
import io
import logging
import pstats

from utils import setup_logging, load_config


def main():
    """
    The main function to run the animation.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except (OSError, ValueError) as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Constellation Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})

    from context import PhysicsParams, SimulationContext, Viewport
    from field import ParticleField
    from input_bridge import InputBridge
    from simulation import SimulationLoop
    from visualization import DisplayFrameScheduler, Visualizer

    params = PhysicsParams.from_config(sim_params)

    # --- Component Initialization ---
    # 1. The visualizer determines the viewport.
    visualizer = Visualizer()
    width, height = visualizer.size

    # 2. Everything else shares one explicit context.
    context = SimulationContext(params=params, viewport=Viewport(width, height))
    field = ParticleField(context)
    bridge = InputBridge(context, field)
    scheduler = DisplayFrameScheduler(visualizer, bridge)
    loop = SimulationLoop(
        context, field, visualizer.surface, scheduler,
        log_throttle_steps=run_params.get('log_throttle_steps', 600),
    )

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    try:
        loop.start()
        if profiler:
            profiler.enable()
        frames = scheduler.run()
        if profiler:
            profiler.disable()
    finally:
        visualizer.close()

    logging.info(f"Frame loop finished after {frames} frames.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Constellation Shutting Down ---")


if __name__ == "__main__":
    main()
