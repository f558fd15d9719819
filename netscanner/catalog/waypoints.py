"""Global path-latency waypoints.

Each waypoint is a regional Google front end answering ``/generate_204``
with an empty body, so elapsed time is dominated by the round trip.
"""

from __future__ import annotations

from netscanner.models import Waypoint


def _wp(country: str, code: str, city: str, region: str, flag: str, host: str) -> Waypoint:
    return Waypoint(
        country=country,
        country_code=code,
        city=city,
        region=region,
        flag=flag,
        endpoint=f"https://{host}/generate_204",
    )


WAYPOINTS: tuple[Waypoint, ...] = (
    _wp("United States", "US", "New York", "North America", "🇺🇸", "www.google.com"),
    _wp("United States", "US", "Los Angeles", "North America", "🇺🇸", "www.gstatic.com"),
    _wp("United Kingdom", "GB", "London", "Europe", "🇬🇧", "www.google.co.uk"),
    _wp("Germany", "DE", "Frankfurt", "Europe", "🇩🇪", "www.google.de"),
    _wp("France", "FR", "Paris", "Europe", "🇫🇷", "www.google.fr"),
    _wp("Netherlands", "NL", "Amsterdam", "Europe", "🇳🇱", "www.google.nl"),
    _wp("Sweden", "SE", "Stockholm", "Europe", "🇸🇪", "www.google.se"),
    _wp("Finland", "FI", "Helsinki", "Europe", "🇫🇮", "www.google.fi"),
    _wp("Norway", "NO", "Oslo", "Europe", "🇳🇴", "www.google.no"),
    _wp("Denmark", "DK", "Copenhagen", "Europe", "🇩🇰", "www.google.dk"),
    _wp("Switzerland", "CH", "Zurich", "Europe", "🇨🇭", "www.google.ch"),
    _wp("Austria", "AT", "Vienna", "Europe", "🇦🇹", "www.google.at"),
    _wp("Italy", "IT", "Milan", "Europe", "🇮🇹", "www.google.it"),
    _wp("Spain", "ES", "Madrid", "Europe", "🇪🇸", "www.google.es"),
    _wp("Portugal", "PT", "Lisbon", "Europe", "🇵🇹", "www.google.pt"),
    _wp("Poland", "PL", "Warsaw", "Europe", "🇵🇱", "www.google.pl"),
    _wp("Czech Republic", "CZ", "Prague", "Europe", "🇨🇿", "www.google.cz"),
    _wp("Romania", "RO", "Bucharest", "Europe", "🇷🇴", "www.google.ro"),
    _wp("Bulgaria", "BG", "Sofia", "Europe", "🇧🇬", "www.google.bg"),
    _wp("Greece", "GR", "Athens", "Europe", "🇬🇷", "www.google.gr"),
    _wp("Turkey", "TR", "Istanbul", "Europe", "🇹🇷", "www.google.com.tr"),
    _wp("Russia", "RU", "Moscow", "Europe", "🇷🇺", "www.google.ru"),
    _wp("Ukraine", "UA", "Kyiv", "Europe", "🇺🇦", "www.google.com.ua"),
    _wp("Japan", "JP", "Tokyo", "Asia", "🇯🇵", "www.google.co.jp"),
    _wp("South Korea", "KR", "Seoul", "Asia", "🇰🇷", "www.google.co.kr"),
    _wp("Singapore", "SG", "Singapore", "Asia", "🇸🇬", "www.google.com.sg"),
    _wp("Hong Kong", "HK", "Hong Kong", "Asia", "🇭🇰", "www.google.com.hk"),
    _wp("Taiwan", "TW", "Taipei", "Asia", "🇹🇼", "www.google.com.tw"),
    _wp("India", "IN", "Mumbai", "Asia", "🇮🇳", "www.google.co.in"),
    _wp("Australia", "AU", "Sydney", "Oceania", "🇦🇺", "www.google.com.au"),
    _wp("New Zealand", "NZ", "Auckland", "Oceania", "🇳🇿", "www.google.co.nz"),
    _wp("Canada", "CA", "Toronto", "North America", "🇨🇦", "www.google.ca"),
    _wp("Brazil", "BR", "São Paulo", "South America", "🇧🇷", "www.google.com.br"),
    _wp("Argentina", "AR", "Buenos Aires", "South America", "🇦🇷", "www.google.com.ar"),
    _wp("Mexico", "MX", "Mexico City", "North America", "🇲🇽", "www.google.com.mx"),
    _wp("Colombia", "CO", "Bogota", "South America", "🇨🇴", "www.google.com.co"),
    _wp("Chile", "CL", "Santiago", "South America", "🇨🇱", "www.google.cl"),
    _wp("South Africa", "ZA", "Johannesburg", "Africa", "🇿🇦", "www.google.co.za"),
    _wp("Egypt", "EG", "Cairo", "Africa", "🇪🇬", "www.google.com.eg"),
    _wp("Nigeria", "NG", "Lagos", "Africa", "🇳🇬", "www.google.com.ng"),
    _wp("Kenya", "KE", "Nairobi", "Africa", "🇰🇪", "www.google.co.ke"),
    _wp("UAE", "AE", "Dubai", "Middle East", "🇦🇪", "www.google.ae"),
    _wp("Saudi Arabia", "SA", "Riyadh", "Middle East", "🇸🇦", "www.google.com.sa"),
    _wp("Israel", "IL", "Tel Aviv", "Middle East", "🇮🇱", "www.google.co.il"),
    _wp("Iran", "IR", "Tehran", "Middle East", "🇮🇷", "www.google.com"),
    _wp("Thailand", "TH", "Bangkok", "Asia", "🇹🇭", "www.google.co.th"),
    _wp("Vietnam", "VN", "Ho Chi Minh", "Asia", "🇻🇳", "www.google.com.vn"),
    _wp("Malaysia", "MY", "Kuala Lumpur", "Asia", "🇲🇾", "www.google.com.my"),
    _wp("Indonesia", "ID", "Jakarta", "Asia", "🇮🇩", "www.google.co.id"),
    _wp("Philippines", "PH", "Manila", "Asia", "🇵🇭", "www.google.com.ph"),
    _wp("Pakistan", "PK", "Karachi", "Asia", "🇵🇰", "www.google.com.pk"),
    _wp("Bangladesh", "BD", "Dhaka", "Asia", "🇧🇩", "www.google.com.bd"),
    _wp("Ireland", "IE", "Dublin", "Europe", "🇮🇪", "www.google.ie"),
    _wp("Belgium", "BE", "Brussels", "Europe", "🇧🇪", "www.google.be"),
    _wp("Hungary", "HU", "Budapest", "Europe", "🇭🇺", "www.google.hu"),
)
