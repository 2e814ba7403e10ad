"""Command-line entry point for running gallery examples and building pages."""

from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

import box_plots
import feature_selection_methods
from config import PAGES_DIR
from core.pages import build_gallery_index

MenuOption = Tuple[str, Callable[[], None] | None]


def _prompt_menu(title: str, options: Dict[str, MenuOption]) -> str:
    """Display a menu and return the selected key."""

    print(f"\n{title}")
    for key, (label, _) in sorted(options.items()):
        print(f"{key}. {label}")

    return input("Choose an option: ").strip()


def _case_menu(label: str, case_studies: Sequence, run_all: Callable[[], object]) -> None:
    """Handle a gallery sub-menu listing its registered cases."""

    while True:
        print(f"\n{label} - available examples:")
        print("1. Run all examples")
        for idx, case in enumerate(case_studies, start=2):
            print(f"{idx}. {case.case_id} - {case.title}")
        print("0. Return to main menu")

        choice = input("Choose an option: ").strip()

        if choice == "0":
            return
        if choice == "1":
            run_all()
            continue

        try:
            numeric_choice = int(choice)
        except ValueError:
            print("Invalid choice, please try again.")
            continue

        case_index = numeric_choice - 2
        if 0 <= case_index < len(case_studies):
            case_studies[case_index].runner()
        else:
            print("Invalid choice, please try again.")


def _box_plots_menu() -> None:
    _case_menu("Box plots", box_plots.CASE_STUDIES, box_plots.run_all_cases)


def _feature_selection_menu() -> None:
    _case_menu(
        "Feature selection",
        feature_selection_methods.CASE_STUDIES,
        feature_selection_methods.run_all_cases,
    )


def _build_pages() -> None:
    """Run every example, write each gallery page and refresh the index."""

    page_paths = [
        box_plots.build_page(pages_root=PAGES_DIR),
        feature_selection_methods.build_page(pages_root=PAGES_DIR),
    ]
    index_path = build_gallery_index(PAGES_DIR)

    print("\nGallery pages built:")
    for path in page_paths:
        print(f" - {path}")
    print(f"Gallery index: {index_path}")


def main() -> None:
    """Main CLI entry point."""

    options: Dict[str, MenuOption] = {
        "1": ("Box plots", _box_plots_menu),
        "2": ("Feature selection (randomized Lasso)", _feature_selection_menu),
        "3": ("Build gallery pages", _build_pages),
        "0": ("Exit", None),
    }

    while True:
        choice = _prompt_menu("Main menu:", options)

        if choice == "0":
            print("Goodbye!")
            return

        action = options.get(choice, ("", None))[1]
        if action is None:
            print("Invalid choice, please try again.")
            continue

        action()


if __name__ == "__main__":
    main()
