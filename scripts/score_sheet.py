#!/usr/bin/env python3
"""Interactive terminal score sheet for a Belote-Coinchée game."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from belote.exceptions import BeloteError
from belote.rules_schema import GameConfig
from belote.service import ScoreService, SessionView
from belote.values import announcement_labels, contract_labels, realized_labels, remark_labels

COMMANDS = "[Enter] add round, u undo, r restart, s statistics, q quit"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Keep the score of a Belote-Coinchée game.")
    parser.add_argument("--team-a", type=str, default=None, help="First team, as Name1/Name2.")
    parser.add_argument("--team-b", type=str, default=None, help="Second team, as Name1/Name2.")
    parser.add_argument("--victory", type=int, default=None, help="Total required to win the game.")
    parser.add_argument("--config", type=str, default=None, help="JSON file with a game configuration.")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser.parse_args()


def build_config(args: argparse.Namespace) -> GameConfig:
    config = GameConfig.load(args.config) if args.config else GameConfig()
    data = config.model_dump()
    names = list(data["team_names"])
    if args.team_a:
        names[0] = args.team_a
    if args.team_b:
        names[1] = args.team_b
    data["team_names"] = tuple(names)
    if args.victory is not None:
        data["victory_threshold"] = args.victory
    return GameConfig.from_mapping(data)


def prompt_choice(prompt: str, options: List[str], default: str) -> str:
    while True:
        raw = input(f"  {prompt} {options} [{default}]: ").strip()
        if not raw:
            return default
        if raw in options:
            return raw
        print(f"  Unknown value {raw!r}. Try again.")


def prompt_declaration(team_name: str) -> Dict[str, str]:
    print(f"{team_name}:")
    return {
        "contract": prompt_choice("Contrat", contract_labels(), "0"),
        "realized": prompt_choice("Réalisé", realized_labels(), "0"),
        "announcement": prompt_choice("Belote", announcement_labels(), "N/A"),
        "remark": prompt_choice("Remarque", remark_labels(), "N/A"),
    }


def print_sheet(view: SessionView) -> None:
    print("\n============================")
    for team in view.teams:
        print(f"{team.name}: {team.total} points (écarts théoriques {team.theoretical_gap})")
        for row in team.rows:
            print(
                f"  Mène {row.mene}: contrat {row.contrat:>8} chute {row.chute:<3} "
                f"réalisé {row.realise:>8} écart {row.ecart:>4} belote {row.belote or '-':<16} "
                f"remarque {row.remarques or '-':<11} points {row.points:>5} total {row.total:>6}"
            )
    if view.dealer:
        print(f"Dealer: {view.dealer}")
    if view.winner:
        print(f"Game over! {view.winner} wins.")


def print_statistics(service: ScoreService) -> None:
    stats = service.get_statistics()
    if stats is None:
        print("Play some rounds to see game statistics here!")
        return
    print(f"Rounds played: {stats.total_rounds}, lead changes: {stats.lead_changes}")
    for team, team_stats in zip(service.session.teams, stats.teams):
        print(
            f"  {team.name}: contracts {team_stats.contracts_played} "
            f"({team_stats.contract_percentage:.1f}%), success {team_stats.success_rate:.1f}%, "
            f"average {team_stats.average_points:.1f}, belotes {team_stats.belote_count}, "
            f"coinches {team_stats.coinche_count}"
        )


def play(service: ScoreService) -> None:
    view = service.get_session_view()
    while True:
        print_sheet(view)
        command = input(f"{COMMANDS}: ").strip().lower()
        if command == "q":
            raise KeyboardInterrupt
        if command == "u":
            if not view.can_undo:
                print("Nothing to undo.")
                continue
            view = service.undo_round()
            continue
        if command == "r":
            view = service.restart()
            continue
        if command == "s":
            print_statistics(service)
            continue
        teams = service.session.teams
        team_a = prompt_declaration(teams[0].name)
        team_b = prompt_declaration(teams[1].name)
        try:
            view = service.add_round(team_a, team_b)
        except BeloteError as exc:
            print(f"Invalid input: {exc}")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    service = ScoreService.from_config(build_config(args))
    try:
        play(service)
    except (KeyboardInterrupt, EOFError):
        print("\nExiting.")


if __name__ == "__main__":
    main()
