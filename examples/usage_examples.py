#!/usr/bin/env python3
"""
Example script showing how to use the node-versions tool.
"""

from pathlib import Path

from node_versions import NodeVersions
from node_versions.reporting import build_status_frame, export_status_csv


def example_status():
    """Example: Lifecycle status of a few lines on a fixed date."""
    print("="*60)
    print("Example 1: Version Status")
    print("="*60)

    nv = NodeVersions(now="2020-11-03").preload()
    for version in ["10", "12", "14", "15"]:
        print(version, nv.classify(version).to_dict(camel_case=True))


def example_filtering():
    """Example: Maintained LTS lines and the latest releases per phase."""
    print("\n" + "="*60)
    print("Example 2: Filtering")
    print("="*60)

    nv = NodeVersions().preload()
    print("Maintained LTS:", nv.filter_significant({"maintained": True, "lts": True}))
    print("Latest active:", nv.filter_significant({"latestActive": True}))
    print("Between 10 and 16:", nv.filter_significant({"between": ["10", "16"]}))
    print("ES editions:", nv.es_versions_for(nv.filter_significant({"maintained": True})))


def example_export():
    """Example: Export the status of every significant version."""
    print("\n" + "="*60)
    print("Example 3: Export")
    print("="*60)

    nv = NodeVersions().preload()
    frame = build_status_frame(nv, nv.data.schedule_identifiers())
    csv_file = export_status_csv(frame, Path("./output"), "node")
    print(f"Status saved to: {csv_file}")


if __name__ == "__main__":
    import sys

    print("Node.js Versions - Example Usage")
    print("="*60)
    print("\nNOTE: These examples require network access.")

    try:
        example_status()
        example_filtering()
        example_export()
    except Exception as e:
        print(f"\nError running examples: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
