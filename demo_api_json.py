#!/usr/bin/env python3
"""
Demo: Generate the API JSON report for the example "widgets" package.

Prints the canonical JSON and the YAML rendering, then writes and validates
widgets.api.json.
"""

import logging

from apisurface.examples import build_example_package
from apisurface.backends import ApiJsonGenerator
from apisurface.serialization import OutputFormat, render_document


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    package = build_example_package(include_placeholder=False)
    generator = ApiJsonGenerator()

    print("=" * 80)
    print("API JSON GENERATOR DEMO")
    print("=" * 80)

    document = generator.generate(package)
    for output_format in (OutputFormat.JSON, OutputFormat.YAML):
        print(f"\n{output_format.value.upper()}:")
        print("-" * 80)
        print(render_document(document, output_format))

    filename = f"{package.name}.api.json"
    generator.write_json_file(filename, package)
    print(f"\nSaved and validated: {filename}")
    print("=" * 80)


if __name__ == "__main__":
    main()
