#!/usr/bin/env python3
"""MCP Server for FIRE Planner.

This server exposes the FIRE simulation and take-home calculations as MCP
tools, allowing AI assistants to answer questions about a household's path
to financial independence.
"""

import os
import sys
import json
import asyncio
from typing import Any

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from model.categories import FamilyPattern, ScenarioKey
from tools import MultiProgramTools


# Create the MCP server
server = Server("fire-planner")

# Global tools instance (initialized on startup)
tools: MultiProgramTools | None = None


def get_tools() -> MultiProgramTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default program can be set via FIRE_PLANNER_PROGRAM env var
        default_program = os.environ.get('FIRE_PLANNER_PROGRAM')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiProgramTools(base_path, default_program)
    return tools


# Common program parameter schema
PROGRAM_PARAM = {
    "type": "string",
    "description": "The program name (folder in input-parameters). If not specified, uses the default program. Use list_programs to see available programs."
}

FAMILY_PARAM = {
    "type": "string",
    "enum": [p.value for p in FamilyPattern],
    "description": "Household pattern for tax deductions: single, couple (one earner with a dependent spouse) or couple-child1. Defaults to single."
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available FIRE planning tools."""
    return [
        Tool(
            name="list_programs",
            description="List all available FIRE programs with their region, family and FIRE age.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="reload_programs",
            description="Reload all programs and reference tables from disk. Use this after adding, modifying, or removing spec.json files to refresh the cache without restarting the server.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_program_overview",
            description="Get an overview of a program: household, income, monthly expenses after FIRE, and the neutral-scenario FIRE number and age. Use this first to understand the plan.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_scenarios",
            description="Compare the optimistic, neutral and pessimistic scenarios: FIRE number, monthly and annual expense, FIRE age and years to FIRE. Amounts are in man-yen (10,000 yen).",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_projection",
            description="Get the year-by-year asset projection against the inflation-adjusted FIRE target for one scenario.",
            inputSchema={
                "type": "object",
                "properties": {
                    "scenario": {
                        "type": "string",
                        "enum": [k.value for k in ScenarioKey],
                        "description": "Scenario to project. Defaults to neutral."
                    },
                    "start_age": {
                        "type": "integer",
                        "description": "Optional: first age to include"
                    },
                    "end_age": {
                        "type": "integer",
                        "description": "Optional: last age to include"
                    },
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_sensitivity",
            description="Show how single changes (investing more, higher return, lower spending, switching strategy) move the years to FIRE.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_withdrawal",
            description="Simulate drawing down assets after FIRE until age 100: yearly assets, inflation-adjusted withdrawal, return and the age the money runs out. Without initial_assets and monthly_withdrawal it starts at the program's neutral FIRE age.",
            inputSchema={
                "type": "object",
                "properties": {
                    "initial_assets": {
                        "type": "number",
                        "description": "Optional: starting assets in man-yen (needs monthly_withdrawal)"
                    },
                    "monthly_withdrawal": {
                        "type": "number",
                        "description": "Optional: monthly spending in man-yen, today's money (needs initial_assets)"
                    },
                    "annual_return": {
                        "type": "number",
                        "description": "Optional: annual return, e.g. 0.03 (default 0.03)"
                    },
                    "inflation_rate": {
                        "type": "number",
                        "description": "Optional: annual inflation applied to the withdrawal (default 0.01)"
                    },
                    "start_age": {
                        "type": "integer",
                        "description": "Optional: age at the start of the drawdown (default 45)"
                    },
                    "program": PROGRAM_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="simulate_query",
            description="Run an ad-hoc simulation from a shareable query string, e.g. 'pref=osaka&income=600&assets=500&invest=10&family=couple&age=35'. Missing values use the defaults.",
            inputSchema={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": "Query string with keys pref, income, incomeType, assets, invest, family, housing, age, targetAge, return, swr, inflation, strategy, yieldRate, expense, taxRate, insuranceCost"
                    }
                },
                "required": ["query"]
            }
        ),
        Tool(
            name="get_take_home",
            description="Calculate take-home pay for an annual gross salary: social insurance, income tax, resident tax and monthly take-home.",
            inputSchema={
                "type": "object",
                "properties": {
                    "gross_annual": {
                        "type": "integer",
                        "description": "Annual gross salary in yen, e.g. 6000000"
                    },
                    "family": FAMILY_PARAM
                },
                "required": ["gross_annual"]
            }
        ),
        Tool(
            name="get_income_table",
            description="Take-home pay at every supported salary level from 2,000,000 to 20,000,000 yen.",
            inputSchema={
                "type": "object",
                "properties": {
                    "family": FAMILY_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="list_prefectures",
            description="List prefectures with their cost-of-living index (1.0 is the national average).",
            inputSchema={
                "type": "object",
                "properties": {
                    "region": {
                        "type": "string",
                        "description": "Optional: region name such as 関東 or 近畿"
                    }
                },
                "required": []
            }
        ),
        Tool(
            name="compare_programs",
            description="Compare two programs on FIRE number, monthly expense and years to FIRE, and say which reaches FIRE sooner.",
            inputSchema={
                "type": "object",
                "properties": {
                    "program1": {
                        "type": "string",
                        "description": "First program name to compare"
                    },
                    "program2": {
                        "type": "string",
                        "description": "Second program name to compare"
                    }
                },
                "required": ["program1", "program2"]
            }
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        fp_tools = get_tools()
        program = arguments.get("program")

        if name == "list_programs":
            result = fp_tools.list_programs()
        elif name == "reload_programs":
            result = fp_tools.reload_programs()
        elif name == "get_program_overview":
            result = fp_tools.get_program_overview(program)
        elif name == "get_scenarios":
            result = fp_tools.get_scenarios(program)
        elif name == "get_projection":
            result = fp_tools.get_projection(
                arguments.get("scenario", ScenarioKey.NEUTRAL.value),
                arguments.get("start_age"),
                arguments.get("end_age"),
                program
            )
        elif name == "get_sensitivity":
            result = fp_tools.get_sensitivity(program)
        elif name == "get_withdrawal":
            result = fp_tools.get_withdrawal(
                program,
                arguments.get("initial_assets"),
                arguments.get("monthly_withdrawal"),
                arguments.get("annual_return"),
                arguments.get("inflation_rate"),
                arguments.get("start_age")
            )
        elif name == "simulate_query":
            result = fp_tools.simulate_query(arguments["query"])
        elif name == "get_take_home":
            result = fp_tools.get_take_home(
                arguments["gross_annual"],
                arguments.get("family", FamilyPattern.SINGLE.value)
            )
        elif name == "get_income_table":
            result = fp_tools.get_income_table(arguments.get("family", FamilyPattern.SINGLE.value))
        elif name == "list_prefectures":
            result = fp_tools.list_prefectures(arguments.get("region"))
        elif name == "compare_programs":
            result = fp_tools.compare_programs(arguments["program1"], arguments["program2"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, ensure_ascii=False, default=str)
        )]
    except Exception as e:
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2, ensure_ascii=False)
        )]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
