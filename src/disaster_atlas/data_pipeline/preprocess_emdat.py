"""
preprocess_emdat.py
-------------------
Builds the tabular inputs of the atlas from a raw EM-DAT export:

- disasters/disasters_<continent>.csv and disasters/disasters_world.csv
  (Country, disaster, disaster_count)
- disaster_info/<continent>_disaster_info.csv
  (Country, disaster, disaster_type, event_name, deaths, affected, start, end)
- emdat-data-processed.csv (flat records for the year panel)

Geometry files are not produced here.
"""
import argparse
import logging
import os

import pandas as pd

from disaster_atlas import config

logger = logging.getLogger(__name__)

BLANK_TOKENS = {"", " ", "-", "--", "—", "n/a", "na", "N/A", "NA", "none", "None"}

# EM-DAT "Region" -> atlas continent; the Americas are split on "Subregion".
REGION_TO_CONTINENT = {
    "Africa": "africa",
    "Asia": "asia",
    "Europe": "europe",
    "Oceania": "oceania",
}
NORTH_AMERICA_SUBREGIONS = {"Northern America"}

HISTOGRAM_KEEP = [
    "DisNo.", "Event Name", "Country", "Region", "Subregion",
    "Start Year", "Start Month", "Start Day",
    "Disaster Group", "Disaster Subgroup", "Disaster Type",
    "Total Deaths", "Total Affected",
]


def load_emdat(filepath: str) -> pd.DataFrame:
    logger.info(f"Loading EM-DAT data from {filepath}...")
    if filepath.lower().endswith((".xlsx", ".xls")):
        return pd.read_excel(filepath)
    return pd.read_csv(filepath)


def _normalize_blank_tokens(frame: pd.DataFrame) -> pd.DataFrame:
    obj_cols = frame.select_dtypes(include=["object", "string"]).columns
    for c in obj_cols:
        frame[c] = (
            frame[c]
            .astype("string")
            .str.strip()
            .replace({val: pd.NA for val in BLANK_TOKENS})
        )
    return frame


def clean_emdat(df: pd.DataFrame) -> pd.DataFrame:
    """Natural events only, one row per DisNo., trimmed text and numeric impacts."""
    df = _normalize_blank_tokens(df.copy())
    logger.info(f"Initial records: {len(df)}")

    if "Disaster Group" in df.columns:
        df = df[df["Disaster Group"].fillna("Natural") == "Natural"]

    if "DisNo." in df.columns:
        before = len(df)
        df = df.drop_duplicates(subset=["DisNo."], keep="first")
        if before - len(df):
            logger.info(f"Removed {before - len(df)} duplicates by DisNo.")

    df = df.dropna(subset=["Country"]).copy()
    for col in ["Start Year", "Start Month", "Start Day", "End Year", "End Month", "End Day"]:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    for col in ["Total Deaths", "Total Affected"]:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").clip(lower=0)

    df["continent"] = [continent_of(r, s) for r, s in zip(_column(df, "Region"), _column(df, "Subregion"))]
    logger.info(f"Records after cleaning: {len(df)}")
    return df.reset_index(drop=True)


def _column(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series(pd.NA, index=df.index, dtype="object")


def continent_of(region, subregion=None) -> str:
    if not isinstance(region, str):
        return ""
    if region == "Americas":
        return "north_america" if subregion in NORTH_AMERICA_SUBREGIONS else "south_america"
    return REGION_TO_CONTINENT.get(region, "")


def _format_date(year, month, day) -> str:
    """"2019-03-07", "2019-03" or "2019" depending on which parts are known."""
    if pd.isna(year):
        return ""
    parts = [f"{int(year):04d}"]
    if not pd.isna(month):
        parts.append(f"{int(month):02d}")
        if not pd.isna(day):
            parts.append(f"{int(day):02d}")
    return "-".join(parts)


def build_counts(df: pd.DataFrame) -> pd.DataFrame:
    """Events per (Country, disaster subgroup)."""
    d = df.dropna(subset=["Disaster Subgroup"])
    if d.empty:
        return pd.DataFrame(columns=["Country", "disaster", "disaster_count"])
    return (
        d
        .groupby(["Country", "Disaster Subgroup"], as_index=False)
        .size()
        .rename(columns={"Disaster Subgroup": "disaster", "size": "disaster_count"})
    )


def build_details(df: pd.DataFrame) -> pd.DataFrame:
    out = pd.DataFrame({
        "Country": df["Country"],
        "disaster": df.get("Disaster Subgroup"),
        "disaster_type": df.get("Disaster Type"),
        "event_name": df.get("Event Name"),
        "deaths": df.get("Total Deaths"),
        "affected": df.get("Total Affected"),
        "start": [_format_date(*r) for r in zip(_column(df, "Start Year"),
                                               _column(df, "Start Month"),
                                               _column(df, "Start Day"))],
        "end": [_format_date(*r) for r in zip(_column(df, "End Year"),
                                             _column(df, "End Month"),
                                             _column(df, "End Day"))],
    })
    for col in ["deaths", "affected"]:
        out[col] = pd.to_numeric(out[col], errors="coerce").astype("Int64")
    return out


def build_histogram_source(df: pd.DataFrame) -> pd.DataFrame:
    cols = [c for c in HISTOGRAM_KEEP if c in df.columns]
    out = df[cols].dropna(subset=["Start Year"]).copy()
    out["Start Year"] = out["Start Year"].astype(int)
    return out


def write_atlas_inputs(df: pd.DataFrame, out_dir: str) -> dict:
    """Write every tabular input file under out_dir. Returns {name: path}."""
    written = {}
    os.makedirs(os.path.join(out_dir, "disasters"), exist_ok=True)
    os.makedirs(os.path.join(out_dir, "disaster_info"), exist_ok=True)

    for continent in config.CONTINENTS:
        part = df[df["continent"] == continent]
        counts_path = os.path.join(out_dir, "disasters", f"disasters_{continent}.csv")
        details_path = os.path.join(out_dir, "disaster_info", f"{continent}_disaster_info.csv")
        build_counts(part).to_csv(counts_path, index=False)
        build_details(part).to_csv(details_path, index=False)
        written[f"counts_{continent}"] = counts_path
        written[f"details_{continent}"] = details_path
        logger.info(f"{continent}: {len(part)} events -> {counts_path}")

    world_path = os.path.join(out_dir, "disasters", "disasters_world.csv")
    build_counts(df).to_csv(world_path, index=False)
    written["counts_world"] = world_path

    hist_path = os.path.join(out_dir, "emdat-data-processed.csv")
    build_histogram_source(df).to_csv(hist_path, index=False)
    written["histogram"] = hist_path

    logger.info(f"Atlas inputs written to {out_dir}")
    return written


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build atlas input tables from an EM-DAT export.")
    parser.add_argument("emdat", help="EM-DAT export (.xlsx or .csv)")
    parser.add_argument("out_dir", nargs="?", default=config.DATA_ROOT, help="output data folder")
    args = parser.parse_args(argv)

    config.setup_logging()
    df = clean_emdat(load_emdat(args.emdat))
    write_atlas_inputs(df, args.out_dir)


if __name__ == "__main__":
    main()
