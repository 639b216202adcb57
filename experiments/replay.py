# experiments/replay.py
"""
Replay tool for JumpEnv — quick command cheat sheet

# Typical usage (run from REPO ROOT)

# Replay a HEURISTIC episode by seed (uses experiments/runs/traces/heuristic/<seed>_actions.npy)
python -m experiments.replay --policy heuristic --seed 105

# Replay by pointing directly to a specific actions file
python -m experiments.replay --trace experiments/runs/traces/random/112_actions.npy --seed 112

# Slow the display down for readability
python -m experiments.replay --policy heuristic --seed 105 --slow

# Controls during replay
SPACE = pause/resume
R     = restart episode
ESC   = quit

# Notes
- Deterministic: the seed fixes the requested apex, so seed + frame_skip + actions reproduce the run.
- With --trace the meta sidecar is not read; pass --frame-skip if it was not 1.
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Optional, List

import numpy as np
import pygame

from smw_jump.env.jump_env import JumpEnv
from smw_jump.game.config import COLOR_FG

DEFAULT_OUT_DIR = "experiments/runs"


def _find_trace(out_dir: Path, policy: str, seed: int) -> Path:
    p = out_dir / "traces" / policy / f"{seed}_actions.npy"
    if not p.exists():
        raise FileNotFoundError(f"Trace not found: {p}")
    return p

def _read_meta(out_dir: Path, policy: str, seed: int) -> dict:
    meta_path = out_dir / "traces" / policy / f"{seed}_meta.txt"
    meta = {}
    if meta_path.exists():
        for line in meta_path.read_text(encoding="utf-8").splitlines():
            if "=" in line:
                k, v = line.split("=", 1)
                meta[k.strip()] = v.strip()
    return meta

def _draw_overlay(env: JumpEnv, step_idx: int, action: Optional[int], font):
    surf = pygame.display.get_surface()
    if surf is None or env.controller is None:
        return
    snap = env.controller.snapshot()
    lines: List[str] = [
        f"Step={step_idx}  Action={'-' if action is None else ('HOLD' if action == 1 else 'UP')}",
        f"Offset={snap.vertical_offset:.2f}px  Target={env.target_height:.2f}px",
        f"Max={snap.max_reached_offset:.2f}px  Stopwatch={snap.elapsed_time:.3f}s",
    ]
    for i, txt in enumerate(lines):
        surf.blit(font.render(txt, True, COLOR_FG), (12, 12 + i * 20))
    pygame.display.flip()

def replay_episode(seed: int, actions: np.ndarray, frame_skip: int, slow: bool = False):
    """Replays one episode with an on-screen overlay."""
    env = JumpEnv(render_mode="human", frame_skip=frame_skip)
    env.reset(seed=seed)
    font = pygame.font.SysFont("jetbrainsmono", 16)
    clock = pygame.time.Clock()

    paused = False
    step_idx = 0
    action: Optional[int] = None
    info = {}
    try:
        running = True
        while running and step_idx < len(actions):
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        paused = not paused
                    elif event.key == pygame.K_r:
                        env.reset(seed=seed)
                        step_idx = 0
                        paused = False

            if not paused:
                action = int(actions[step_idx])
                _, _, term, trunc, info = env.step(action)
                step_idx += 1
                if term or trunc:
                    running = False

            env.render()
            _draw_overlay(env, step_idx, action, font)
            if slow:
                clock.tick(15)
    finally:
        env.close()

    if info:
        print(f"Replay done: seed={seed} steps={step_idx} "
              f"target={info['target_height']:.2f} apex={info['apex']:.2f}")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--policy", type=str, default="heuristic", choices=["random", "heuristic"])
    ap.add_argument("--seed", type=int, required=True, help="Episode seed (fixes the requested apex)")
    ap.add_argument("--trace", type=str, default=None, help="Explicit path to a *_actions.npy file")
    ap.add_argument("--out-dir", type=str, default=DEFAULT_OUT_DIR)
    ap.add_argument("--frame-skip", type=int, default=None)
    ap.add_argument("--slow", action="store_true", help="Limit display to ~15 fps")
    args = ap.parse_args()

    out_dir = Path(args.out_dir)
    if args.trace:
        trace_path = Path(args.trace)
        meta = {}
    else:
        trace_path = _find_trace(out_dir, args.policy, args.seed)
        meta = _read_meta(out_dir, args.policy, args.seed)

    frame_skip = args.frame_skip or int(meta.get("frame_skip", 1))
    actions = np.load(trace_path)
    print(f"Replaying {trace_path} ({len(actions)} actions, frame_skip={frame_skip})")
    replay_episode(args.seed, actions, frame_skip, slow=args.slow)


if __name__ == "__main__":
    main()
