#!/usr/bin/env python3
"""MCP Server for Dividend Planner.

This server exposes the dividend calculations as MCP tools, allowing AI
assistants to answer questions about a user's dividend portfolio.
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

from tools import MultiPortfolioTools


# Create the MCP server
server = Server("dividend-planner")

# Global tools instance (initialized on startup)
tools: MultiPortfolioTools | None = None


def get_tools() -> MultiPortfolioTools:
    """Get or initialize the tools instance."""
    global tools
    if tools is None:
        # Default portfolio can be set via DIVIDEND_PLANNER_PORTFOLIO env var
        default_portfolio = os.environ.get('DIVIDEND_PLANNER_PORTFOLIO')
        base_path = os.path.join(os.path.dirname(__file__), '..')
        tools = MultiPortfolioTools(base_path, default_portfolio)
    return tools


# Common portfolio parameter schema
PORTFOLIO_PARAM = {
    "type": "string",
    "description": "The portfolio name (folder in input-parameters). If not specified, uses the default portfolio. Use list_portfolios to see available portfolios."
}

YEAR_PARAM = {
    "type": "integer",
    "description": "Optional: calendar year. Defaults to the current year."
}


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available dividend planning tools."""
    return [
        Tool(
            name="list_portfolios",
            description="List all available dividend portfolios with their number of positions and free allowance.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="reload_portfolios",
            description="Reload all portfolios from disk. Use this after adding, modifying, or removing portfolio.json files.",
            inputSchema={
                "type": "object",
                "properties": {},
                "required": []
            }
        ),
        Tool(
            name="get_portfolio_overview",
            description="Get an overview of a portfolio: positions, yield on cost, top dividend payers and configured planning inputs.",
            inputSchema={
                "type": "object",
                "properties": {
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_dashboard_stats",
            description="Get gross and net dividends, withholding and capital gains tax, average monthly net income and remaining free allowance for a calendar year.",
            inputSchema={
                "type": "object",
                "properties": {
                    "year": YEAR_PARAM,
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_payment_schedule",
            description="Get every taxed dividend payment of a year in date order, for the whole portfolio or a single position.",
            inputSchema={
                "type": "object",
                "properties": {
                    "year": YEAR_PARAM,
                    "position_id": {
                        "type": "string",
                        "description": "Optional: id of a single position"
                    },
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_monthly_dividends",
            description="Get gross and net dividends for each of the twelve months of a year.",
            inputSchema={
                "type": "object",
                "properties": {
                    "year": YEAR_PARAM,
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_upcoming_payments",
            description="Get the dividend payments due within the next days.",
            inputSchema={
                "type": "object",
                "properties": {
                    "days": {
                        "type": "integer",
                        "description": "Number of days to look ahead (default 30)"
                    },
                    "limit": {
                        "type": "integer",
                        "description": "Optional: maximum number of payments to return"
                    },
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_portfolio_performance",
            description="Get total cost, market value, gain and performance percentage of a portfolio.",
            inputSchema={
                "type": "object",
                "properties": {
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="get_sector_allocation",
            description="Get the split of market value and annual dividend by sector.",
            inputSchema={
                "type": "object",
                "properties": {
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="optimize_free_allowance",
            description="Suggest how to spread the annual free allowance (Freistellungsauftrag) over the positions to save the most tax.",
            inputSchema={
                "type": "object",
                "properties": {
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="calculate_net_dividend",
            description="Run the German dividend tax waterfall for one gross dividend: foreign withholding tax, free allowance, capital gains tax with withholding credit, net amount.",
            inputSchema={
                "type": "object",
                "properties": {
                    "gross": {
                        "type": "number",
                        "description": "Gross dividend in EUR"
                    },
                    "country": {
                        "type": "string",
                        "description": "Country code of the paying company, e.g. 'US'"
                    },
                    "free_allowance_remaining": {
                        "type": "number",
                        "description": "Free allowance still available in EUR (default 0)"
                    }
                },
                "required": ["gross", "country"]
            }
        ),
        Tool(
            name="simulate_drip",
            description="Project dividend reinvestment year by year. Uses the portfolio's configured scenarios unless a scenario is given.",
            inputSchema={
                "type": "object",
                "properties": {
                    "scenario": {
                        "type": "object",
                        "description": "Optional scenario with initialInvestment, monthlyContribution, years, averageYield (%), dividendGrowthRate (%), sharePrice, dividendPerShare"
                    },
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="solve_savings_plan",
            description="Find the monthly contribution needed to reach a target annual dividend. Uses the portfolio's savings goal unless a goal is given.",
            inputSchema={
                "type": "object",
                "properties": {
                    "goal": {
                        "type": "object",
                        "description": "Optional goal with targetAnnualDividend, averageYield (%), years, dividendGrowthRate (%), initialInvestment"
                    },
                    "portfolio": PORTFOLIO_PARAM
                },
                "required": []
            }
        ),
        Tool(
            name="calculate_vorabpauschale",
            description="Calculate the German advance lump-sum tax (Vorabpauschale) of an accumulating fund for a year.",
            inputSchema={
                "type": "object",
                "properties": {
                    "value_start": {
                        "type": "number",
                        "description": "Fund value at the start of the year"
                    },
                    "value_end": {
                        "type": "number",
                        "description": "Fund value at the end of the year"
                    },
                    "distributions": {
                        "type": "number",
                        "description": "Distributions paid during the year"
                    },
                    "year": {
                        "type": "integer",
                        "description": "Tax year"
                    },
                    "base_rate": {
                        "type": "number",
                        "description": "Optional: base rate (Basiszins) in percent, overriding the reference value"
                    }
                },
                "required": ["value_start", "value_end", "distributions", "year"]
            }
        )
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        dp_tools = get_tools()
        portfolio = arguments.get("portfolio")

        if name == "list_portfolios":
            result = dp_tools.list_portfolios()
        elif name == "reload_portfolios":
            result = dp_tools.reload_portfolios()
        elif name == "get_portfolio_overview":
            result = dp_tools.get_portfolio_overview(portfolio)
        elif name == "get_dashboard_stats":
            result = dp_tools.get_dashboard_stats(arguments.get("year"), portfolio)
        elif name == "get_payment_schedule":
            result = dp_tools.get_payment_schedule(arguments.get("year"), arguments.get("position_id"), portfolio)
        elif name == "get_monthly_dividends":
            result = dp_tools.get_monthly_dividends(arguments.get("year"), portfolio)
        elif name == "get_upcoming_payments":
            result = dp_tools.get_upcoming_payments(arguments.get("days", 30), arguments.get("limit"), portfolio)
        elif name == "get_portfolio_performance":
            result = dp_tools.get_portfolio_performance(portfolio)
        elif name == "get_sector_allocation":
            result = dp_tools.get_sector_allocation(portfolio)
        elif name == "optimize_free_allowance":
            result = dp_tools.optimize_free_allowance(portfolio)
        elif name == "calculate_net_dividend":
            result = dp_tools.calculate_net_dividend(
                arguments["gross"],
                arguments["country"],
                arguments.get("free_allowance_remaining", 0.0)
            )
        elif name == "simulate_drip":
            result = dp_tools.simulate_drip(arguments.get("scenario"), portfolio)
        elif name == "solve_savings_plan":
            result = dp_tools.solve_savings_plan(arguments.get("goal"), portfolio)
        elif name == "calculate_vorabpauschale":
            result = dp_tools.calculate_vorabpauschale(
                arguments["value_start"],
                arguments["value_end"],
                arguments["distributions"],
                arguments["year"],
                arguments.get("base_rate")
            )
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str)
        )]
    except Exception as e:
        return [TextContent(
            type="text",
            text=json.dumps({"error": str(e)}, indent=2)
        )]


async def main():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


if __name__ == "__main__":
    asyncio.run(main())
