#!/usr/bin/env python3
"""
Person Graph - Command Line Entry Point

Composes the graph of films and starships a person used and, unless
``--no-layout`` is given, lays it out top to bottom. The result is printed as
JSON or written to ``--output``.
"""

import asyncio
import argparse
import json
import sys
from pathlib import Path

from person_graph.config import settings
from person_graph.graph import GraphDataOrchestrator, LayoutError, UnresolvedStarshipError, build_graph
from person_graph.transport import HttpClient, HttpError
from person_graph.utils.logger import app_logger, setup_logging
from person_graph.view import GraphView, PersonGraphSession


async def run(person_id: int, base_url: str, layout: bool) -> dict:
    async with HttpClient(base_url=base_url) as client:
        orchestrator = GraphDataOrchestrator(client)

        if not layout:
            data = await orchestrator.compose(person_id)
            nodes, edges = build_graph(data)
            return {
                "person": data.person.model_dump(),
                "positioned": False,
                "nodes": [node.model_dump(mode="json") for node in nodes],
                "edges": [edge.model_dump(mode="json") for edge in edges],
            }

        session = PersonGraphSession(orchestrator.compose, view=GraphView())
        data = await session.select_person(person_id)
        return {"person": data.person.model_dump(), **session.view.to_dict()}


def main():
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Person Graph - films and starships of a person")
    parser.add_argument("--person-id", type=int, required=True, help="Id of the person")
    parser.add_argument("--output", help="Write the graph JSON to this file instead of stdout")
    parser.add_argument("--base-url", default=settings.swapi_base_url, help="Upstream API base URL")
    parser.add_argument("--no-layout", action="store_true", help="Skip the layout stage")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")

    args = parser.parse_args()

    logger = app_logger
    if args.log_level != settings.log_level:
        logger = setup_logging(args.log_level, settings.log_file)

    logger.info(f"Building graph for person {args.person_id}")

    try:
        result = asyncio.run(run(args.person_id, args.base_url, not args.no_layout))
    except (HttpError, UnresolvedStarshipError) as e:
        logger.error(f"Upstream request failed: {e}")
        sys.exit(1)
    except LayoutError as e:
        logger.error(f"Layout failed: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Error building graph: {e}")
        sys.exit(1)

    payload = json.dumps(result, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(payload, encoding="utf-8")
        logger.info(f"Graph written to {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
