"""pygame front end: window, keyboard and the 60 Hz frame loop."""

import dataclasses

import jax
import pygame

from chix8.config import EmulatorConfig
from chix8.constants import SCREEN_WIDTH, SCREEN_HEIGHT, TIMER_FREQUENCY
from chix8.emulator import load_rom, toggle_pause
from chix8.logging import ConsoleLogger
from chix8.rendering import display_to_rgb
from chix8.runner import run_frame
from chix8.state import EmulatorState, create_state, set_key, framebuffer_snapshot, is_sound_on

# Conventional hex keypad layout on the left of a QWERTY keyboard
#   1 2 3 C      1 2 3 4
#   4 5 6 D  ->  Q W E R
#   7 8 9 E      A S D F
#   A 0 B F      Z X C V
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

WINDOW_TITLE = "chix8"


def handle_events(state: EmulatorState, logger: ConsoleLogger) -> tuple[EmulatorState, bool, set]:
    """Apply pending pygame events to the machine.

    A key pressed and released within the same batch of events stays down
    until the caller has run the next frame, so short taps reach the program.

    Returns:
        Tuple of the updated state, whether the user asked to quit, and the
        keys whose release has to be applied after the next frame
    """
    pressed_now = set()
    deferred_releases = set()
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return state, True, deferred_releases
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return state, True, deferred_releases
            if event.key == pygame.K_SPACE:
                state = toggle_pause(state)
                logger.info("Paused" if state.status.is_paused else "Resumed")
            elif event.key in KEY_MAP:
                key = KEY_MAP[event.key]
                state = set_key(state, key, True)
                pressed_now.add(key)
                deferred_releases.discard(key)
        elif event.type == pygame.KEYUP and event.key in KEY_MAP:
            key = KEY_MAP[event.key]
            if key in pressed_now:
                deferred_releases.add(key)
            else:
                state = set_key(state, key, False)
    return state, False, deferred_releases


def release_keys(state: EmulatorState, keys: set) -> EmulatorState:
    """Release keys held back by ``handle_events``."""
    for key in keys:
        state = set_key(state, key, False)
    return state


def draw(screen: pygame.Surface, state: EmulatorState, config: EmulatorConfig):
    """Blit the framebuffer onto the window surface."""
    frame = display_to_rgb(framebuffer_snapshot(state), config.scale, config.fg_color, config.bg_color)
    # pygame surfaces are indexed [x, y]
    pygame.surfarray.blit_array(screen, frame.transpose(1, 0, 2))
    pygame.display.flip()


def run_emulator(config: EmulatorConfig, logger: ConsoleLogger = None, seed: int = 0) -> EmulatorState:
    """Open a window and run the ROM from ``config`` until quit or halt.

    Raises:
        RomLoadFailed: If the ROM cannot be read
        RomTooLarge: If the ROM does not fit in memory
    """
    logger = logger or ConsoleLogger()
    logger.log_config(dataclasses.asdict(config))

    state = load_rom(create_state(jax.random.PRNGKey(seed)), config.rom)
    logger.info(f"Loaded: {config.rom}")

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH * config.scale, SCREEN_HEIGHT * config.scale))
        pygame.display.set_caption(WINDOW_TITLE)
        clock = pygame.time.Clock()
        frame = 0
        sound_on = False

        logger.info("Controls: ESC=Quit, SPACE=Pause")
        while True:
            clock.tick(TIMER_FREQUENCY)

            state, quit_requested, deferred_releases = handle_events(state, logger)
            if quit_requested:
                break

            state = run_frame(state, config.cycles_for_frame(frame))
            state = release_keys(state, deferred_releases)
            frame += 1
            if state.status.is_halted:
                logger.error(f"Machine halted: {state.status.reason}")
                logger.log_machine(state)
                break

            if is_sound_on(state) != sound_on:
                sound_on = not sound_on
                pygame.display.set_caption(f"{WINDOW_TITLE} (beep)" if sound_on else WINDOW_TITLE)

            draw(screen, state, config)
    finally:
        pygame.quit()

    return state
