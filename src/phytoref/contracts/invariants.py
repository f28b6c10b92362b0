"""Formal pipeline invariants.

This file documents what each stage MUST produce. This is architecture, not code.
Use this file as a reviewer anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "records": [
        "Table has year, station, date, month, phylum, scientific_name, trophic_type, "
        "depth_min, parameter, value, unit columns",
        "date is datetime64; month is within 1..12",
        "year, station, date, month and value are never null",
        "value is numeric and non-negative",
    ],

    "filter": [
        "Full population: depth_min == 0 and parameter == configured parameter",
        "Grouped population: subset of full population with a taxon group",
        "Neither population is empty",
    ],

    "aggregation": [
        "One row per (station, year, month, taxa)",
        "Selected cell == sum of group cells for the same (station, year, month)",
        "Roll-up order: sum per visit and group, then mean per station-month",
        "Output sorted by date",
    ],

    "yearly_statistics": [
        "One row per year, ascending",
        "sd is the sample standard deviation (n - 1); missing when n < 2",
        "rolling_* missing at the first and last window//2 positions",
    ],

    "stability_window": [
        "center_year is the earliest year at the minimum rolling_sd",
        "start_year = center_year - window//2, end_year = center_year + window//2",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "records": "REQUIRED",
    "filter": "REQUIRED",
    "aggregation": "REQUIRED",
    "yearly_statistics": "REQUIRED",
    "stability_window": "OPTIONAL",  # Fails per population when too few years
}
