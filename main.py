"""Simple entrypoint to run the wardrobe planner locally."""

from datetime import date

from planner_app.app import WardrobePlannerApp


def main() -> None:
    app = WardrobePlannerApp()
    builder = app.new_builder(date.today())
    weather = builder.weather
    print(f"Weather: {weather.to_dict() if weather else 'unavailable'}")
    print(f"Wardrobe items: {len(builder.wardrobe_items)}")
    yesterday = app.yesterday_outfit()
    print(f"Yesterday's outfit: {yesterday.items if yesterday else 'none recorded'}")


if __name__ == "__main__":
    main()
