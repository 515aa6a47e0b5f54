"""
FastAPI application and API routes for Calc Studio.
"""

from contextlib import asynccontextmanager
from html import escape

import structlog
from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse

from calc_studio import __version__
from calc_studio.calculator import (
    DEMO_CALCULATIONS,
    Calculator,
    InvalidArgumentError,
    Number,
    calculator,
    format_result,
    parse_operand,
)
from calc_studio.config import Settings, configure_logging, get_settings
from calc_studio.example import Example
from calc_studio.models import Calculation, CalculationRequest, Greeting, Operation

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    config = get_settings()
    configure_logging(config.log_level, json=config.log_json)
    logger.info("Starting Calc Studio", version=__version__)
    yield


app = FastAPI(
    title="Calc Studio",
    description="Calculator Demo Application",
    version=__version__,
    lifespan=lifespan,
)


def get_calculator() -> Calculator:
    """Get the shared calculator for dependency injection."""
    return calculator


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get("/api/v1/config")
async def get_config(config: Settings = Depends(get_settings)):
    """Get public configuration."""
    return {
        "app_name": config.app_name,
        "greeting_name": config.greeting_name,
        "operations": [op.value for op in Operation],
    }


# =============================================================================
# Calculator API
# =============================================================================

@app.get("/api/v1/calculate/{operation}", response_model=Calculation)
async def calculate_query(
    operation: str,
    a: str = Query(..., description="First operand"),
    b: str = Query(..., description="Second operand"),
    calc: Calculator = Depends(get_calculator),
):
    """Run one operation on operands given as query parameters."""
    try:
        op = Operation(operation)
    except ValueError:
        logger.info("Unknown operation requested", operation=operation)
        raise HTTPException(status_code=404, detail=f"Unknown operation: {operation}")

    try:
        left, right = parse_operand(a), parse_operand(b)
    except InvalidArgumentError as e:
        logger.info("Invalid operand", a=a, b=b)
        raise HTTPException(status_code=422, detail=str(e))

    return _calculate(calc, op, left, right)


@app.post("/api/v1/calculate", response_model=Calculation)
async def calculate(
    request: CalculationRequest,
    calc: Calculator = Depends(get_calculator),
):
    """Run one operation on operands given as a JSON body."""
    return _calculate(calc, request.operation, request.a, request.b)


# =============================================================================
# Greeting API
# =============================================================================

@app.get("/api/v1/greet", response_model=Greeting)
async def greet(
    name: str | None = None,
    config: Settings = Depends(get_settings),
):
    """Greet the given name, or the configured default."""
    name = name or config.greeting_name
    return Greeting(name=name, message=Example().greet(name))


# =============================================================================
# Demo Page
# =============================================================================

@app.get("/", response_class=HTMLResponse)
async def index(
    config: Settings = Depends(get_settings),
    calc: Calculator = Depends(get_calculator),
):
    """Render the demo page."""
    rows = []
    for op, a, b in DEMO_CALCULATIONS:
        result = calc.apply(op, a, b)
        rows.append(_ROW_TEMPLATE.format(
            expression=escape(f"{a} {op.symbol} {b}"),
            result=escape(format_result(result)),
        ))

    return _PAGE_TEMPLATE.format(
        title=escape(config.app_name),
        greeting=escape(Example().greet(config.greeting_name)),
        rows="\n".join(rows),
    )


# =============================================================================
# Helper Functions
# =============================================================================

def _calculate(calc: Calculator, op: Operation, a: Number, b: Number) -> Calculation:
    """Run a calculation and map calculator errors to HTTP errors."""
    try:
        result = calc.apply(op, a, b)
    except InvalidArgumentError as e:
        logger.info("Calculation rejected", operation=op.value, a=a, b=b, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))

    return Calculation.build(op, a, b, result)


_ROW_TEMPLATE = """\
            <div class="calculation">
                <span class="expression">{expression}</span>
                <span class="result">{result}</span>
            </div>"""

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Demo App - {title}</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            min-height: 100vh;
            display: flex;
            align-items: center;
            justify-content: center;
            margin: 0;
            padding: 20px;
        }}
        .container {{
            background: white;
            border-radius: 20px;
            padding: 40px;
            max-width: 600px;
            width: 100%;
        }}
        .demo-section {{
            background: #f8f9fa;
            border-radius: 10px;
            padding: 20px;
            margin-bottom: 20px;
        }}
        .calculation {{
            background: white;
            padding: 15px;
            border-radius: 8px;
            margin-bottom: 10px;
            display: flex;
            justify-content: space-between;
            border-left: 4px solid #667eea;
        }}
        .calculation .result {{
            color: #667eea;
            font-weight: bold;
        }}
    </style>
</head>
<body>
    <div class="container">
        <h1>Demo App</h1>
        <p class="subtitle">{greeting}</p>

        <div class="demo-section">
            <h2>Calculator Demo</h2>
{rows}
        </div>
    </div>
</body>
</html>
"""
