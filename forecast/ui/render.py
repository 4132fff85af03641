"""Plain text renderers for each screen."""

from forecast.models.weather_codes import describe
from forecast.nav.view_models import DetailView, LocationListView, SearchView, View

FOOTER = "(ctrl+c to quit)"
SEARCH_PLACEHOLDER = "Search for a placename"
MAX_SEARCH_ROWS = 20


def render(view: View) -> str:
    if isinstance(view, SearchView):
        body = render_search(view)
    elif isinstance(view, LocationListView):
        body = render_location_list(view)
    else:
        body = render_detail(view)
    return f"{body}\n{_status(view)}{FOOTER}\n"


def render_search(view: SearchView) -> str:
    lines = [f"Search: {view.query or SEARCH_PLACEHOLDER}", ""]
    lines.append(f"  {'Name':<40} {'ID':<10} {'Region':<10}")
    start = max(0, view.cursor - MAX_SEARCH_ROWS + 1)
    for i, row in enumerate(view.rows[start:start + MAX_SEARCH_ROWS], start):
        marker = ">" if i == view.cursor else " "
        lines.append(f"{marker} {row.name:<40} {row.id:<10} {row.region:<10}")
    if not view.rows:
        lines.append("  No matching places")
    return "\n".join(lines)


def render_location_list(view: LocationListView) -> str:
    lines = [f"{view.header} [{view.resolution}]", ""]
    for i, item in enumerate(view.items):
        marker = ">" if i == view.cursor else " "
        lines.append(f"{marker} {item.title}")
        lines.append(f"    {item.summary}")
    return "\n".join(lines)


def render_detail(view: DetailView) -> str:
    fc = view.forecast
    lines = [
        f"{view.location_name} - {view.title}",
        "",
        describe(fc.weather_code),
        f"{fc.precipitation}% chance of rain",
        f"{fc.temperature}°C (feels like {fc.feels_like_temp}°C)",
        f"{fc.wind_speed}mph Wind",
        f"{fc.wind_direction} Wind Direction",
        f"{fc.gust_speed}mph Gusts",
        f"{fc.humidity}% Humidity",
        f"{fc.visibility} Visibility",
    ]
    if fc.uv:
        lines.append(f"UV index {fc.uv}")
    return "\n".join(lines)


def _status(view: View) -> str:
    if view.loading:
        return "Loading...\n"
    if view.error:
        return f"Error: {view.error}\n"
    return ""
