"""Tests for the MCP server module."""

import os
import sys
import json
import pytest
from unittest.mock import patch

# Add src and mcp-server to path for imports BEFORE importing mcp modules
MCP_SERVER_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../mcp-server'))
SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src'))

if MCP_SERVER_PATH not in sys.path:
    sys.path.insert(0, MCP_SERVER_PATH)
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from mcp.types import Tool, TextContent

# Import server module - need to import from the mcp-server directory
import importlib.util
server_spec = importlib.util.spec_from_file_location("mcp_server", os.path.join(MCP_SERVER_PATH, "server.py"))
mcp_server = importlib.util.module_from_spec(server_spec)
server_spec.loader.exec_module(mcp_server)


class TestServerConfiguration:
    """Tests for server configuration and setup."""

    def test_server_name(self):
        assert mcp_server.server.name == "dividend-planner"

    def test_portfolio_param_schema(self):
        assert mcp_server.PORTFOLIO_PARAM['type'] == 'string'
        assert 'description' in mcp_server.PORTFOLIO_PARAM


class TestGetTools:
    """Tests for get_tools function."""

    def setup_method(self):
        mcp_server.tools = None

    def teardown_method(self):
        mcp_server.tools = None

    def test_get_tools_initializes_on_first_call(self):
        tools = mcp_server.get_tools()

        assert tools is not None
        # Check by class name since we're using dynamic imports
        assert tools.__class__.__name__ == 'MultiPortfolioTools'

    def test_get_tools_returns_cached_instance(self):
        assert mcp_server.get_tools() is mcp_server.get_tools()

    @patch.dict(os.environ, {'DIVIDEND_PLANNER_PORTFOLIO': 'example'})
    def test_get_tools_uses_env_default_portfolio(self):
        tools = mcp_server.get_tools()
        assert tools.default_portfolio == 'example'


class TestListTools:
    """Tests for list_tools function."""

    @pytest.mark.asyncio
    async def test_list_tools_returns_tools(self):
        tools = await mcp_server.list_tools()

        assert isinstance(tools, list)
        assert len(tools) > 0
        assert all(isinstance(t, Tool) for t in tools)

    @pytest.mark.asyncio
    async def test_list_tools_contains_expected_tools(self):
        tools = await mcp_server.list_tools()
        tool_names = [t.name for t in tools]

        expected_tools = [
            'list_portfolios',
            'reload_portfolios',
            'get_portfolio_overview',
            'get_dashboard_stats',
            'get_payment_schedule',
            'get_monthly_dividends',
            'get_upcoming_payments',
            'get_portfolio_performance',
            'get_sector_allocation',
            'optimize_free_allowance',
            'calculate_net_dividend',
            'simulate_drip',
            'solve_savings_plan',
            'calculate_vorabpauschale',
        ]

        for expected in expected_tools:
            assert expected in tool_names

    @pytest.mark.asyncio
    async def test_tools_have_input_schemas(self):
        tools = await mcp_server.list_tools()

        for tool in tools:
            assert tool.description
            assert tool.inputSchema['type'] == 'object'

    @pytest.mark.asyncio
    async def test_net_dividend_requires_gross_and_country(self):
        tools = await mcp_server.list_tools()
        net = next(t for t in tools if t.name == 'calculate_net_dividend')

        assert net.inputSchema['required'] == ['gross', 'country']


class TestCallTool:
    """Tests for call_tool function."""

    def setup_method(self):
        mcp_server.tools = None

    @pytest.mark.asyncio
    async def test_call_list_portfolios(self):
        result = await mcp_server.call_tool('list_portfolios', {})

        assert isinstance(result, list)
        assert len(result) == 1
        assert isinstance(result[0], TextContent)

        data = json.loads(result[0].text)
        assert 'example' in data['available_portfolios']

    @pytest.mark.asyncio
    async def test_call_get_dashboard_stats(self):
        result = await mcp_server.call_tool('get_dashboard_stats', {'year': 2026, 'portfolio': 'example'})

        data = json.loads(result[0].text)
        assert data['year'] == 2026
        assert data['portfolio'] == 'example'
        assert data['total_gross_annual'] > 0

    @pytest.mark.asyncio
    async def test_call_calculate_net_dividend(self):
        result = await mcp_server.call_tool('calculate_net_dividend', {'gross': 1000, 'country': 'DE'})

        data = json.loads(result[0].text)
        assert data['capital_gains_tax'] == 263.75
        assert data['net'] == 736.25

    @pytest.mark.asyncio
    async def test_call_calculate_vorabpauschale(self):
        result = await mcp_server.call_tool('calculate_vorabpauschale', {
            'value_start': 50000, 'value_end': 55000, 'distributions': 0, 'year': 2024
        })

        data = json.loads(result[0].text)
        assert data['vorabpauschale'] == 801.5

    @pytest.mark.asyncio
    async def test_unknown_portfolio_returns_error(self):
        result = await mcp_server.call_tool('get_portfolio_overview', {'portfolio': 'missing'})

        data = json.loads(result[0].text)
        assert 'error' in data
        assert 'missing' in data['error']

    @pytest.mark.asyncio
    async def test_missing_required_argument_returns_error(self):
        result = await mcp_server.call_tool('calculate_net_dividend', {'country': 'US'})

        data = json.loads(result[0].text)
        assert 'error' in data

    @pytest.mark.asyncio
    async def test_unknown_tool_returns_error(self):
        result = await mcp_server.call_tool('does_not_exist', {})

        data = json.loads(result[0].text)
        assert data['error'] == 'Unknown tool: does_not_exist'


class TestResponseFormat:
    """Tests for response format consistency."""

    def setup_method(self):
        mcp_server.tools = None

    @pytest.mark.asyncio
    async def test_response_is_valid_json(self):
        tools = await mcp_server.list_tools()

        required_args = {
            'gross': 500,
            'country': 'US',
            'value_start': 10000,
            'value_end': 11000,
            'distributions': 0,
            'year': 2024,
        }
        for tool in tools:
            args = {'portfolio': 'example'}
            for name in tool.inputSchema.get('required', []):
                args[name] = required_args[name]

            result = await mcp_server.call_tool(tool.name, args)

            assert all(isinstance(r, TextContent) for r in result)
            data = json.loads(result[0].text)
            assert isinstance(data, dict)
            assert 'error' not in data
