"""Run a handful of conversions, compound parses and searches through the engine."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from calcq import ConversionEngine, EngineConfig
from calcq.compound import CompoundFormatType

CONVERSIONS = [
    (0, "temperature", "celsius", "fahrenheit"),
    (100, "temperature", "celsius", "fahrenheit"),
    (1, "length", "mile", "meter"),
    (1024, "digital", "kibibyte", "byte"),
    (6, "speed", "beaufort", "knot"),
    ("not a number", "length", "meter", "foot"),
]

COMPOUND_INPUTS = [
    ("5'10\"", CompoundFormatType.HEIGHT, ("meter", "centimeter")),
    ("2 1/2 cups", CompoundFormatType.COOKING, ("milliliter",)),
    ("2 mi 300 yd", CompoundFormatType.DISTANCE, ("kilometer", "meter")),
]

QUERIES = ["meter", "gal", "byte"]


async def run() -> dict:
    async with ConversionEngine(EngineConfig.from_env()) as engine:
        batch = await engine.batch.convert(CONVERSIONS)
        conversions = [
            {
                "input": f"{item.value} {item.from_unit_id}",
                "output": item.result.display if item.result is not None else None,
                "error": item.error,
            }
            for item in batch.items
        ]

        compounds = []
        for text, format_type, targets in COMPOUND_INPUTS:
            measurement = await engine.compound.parse_compound_input(text, format_type)
            converted = await engine.compound.convert_compound(measurement, targets)
            compounds.append(
                {
                    "input": text,
                    "parsed": engine.compound.format_compound_measurement(measurement),
                    "converted": engine.compound.format_compound_measurement(converted.converted),
                    "equivalent": converted.single_unit_equivalent.display,
                }
            )

        await engine.search_index.index_all()
        searches = {
            query: [f"{hit.name} ({hit.category_name}, {hit.relevance})" for hit in engine.search_units(query, 5)]
            for query in QUERIES
        }

    return {
        "batch_id": batch.batch_id,
        "dispatched_to_worker": batch.dispatched_to_worker,
        "conversions": conversions,
        "compounds": compounds,
        "searches": searches,
    }


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    summary = asyncio.run(run())

    output_path = Path("results/conversion_demo.json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Wrote {output_path} with {len(summary['conversions'])} conversions.")
    for entry in summary["conversions"]:
        print(f"- {entry['input']} -> {entry['output'] or entry['error']}")
    for entry in summary["compounds"]:
        print(f"- {entry['input']} -> {entry['converted']} (~ {entry['equivalent']})")


if __name__ == "__main__":  # pragma: no cover - manual script
    main()
