"""Part cross-reference MCP server - rule-based replacement matching for electronic components."""

import json
import logging
from typing import Any

from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from starlette.responses import JSONResponse
from starlette.routing import Route

from . import __version__
from .config import HTTP_PORT, LOG_LEVEL, MAX_CANDIDATES, MAX_TEXT_LENGTH
from .context import apply_context
from .context_questions import get_context_config
from .logic_tables import enrich_for_family, get_logic_table, list_families as _list_families, resolve_logic_table
from .mapper import map_keyword_response, map_product_to_attributes
from .matching import detect_missing_attributes, evaluate, find_replacements as _find_replacements
from .models import LogicTable, PartAttributes, to_dict

logger = logging.getLogger(__name__)


mcp = FastMCP(
    name="partxref",
    instructions="Rule-based cross-reference for electronic components. Pass raw vendor product records "
                 "(DigiKey product JSON). Use map_product to see how a part is normalized and which family "
                 "it belongs to, missing_attributes to find specs worth asking about, then evaluate_candidate "
                 "or find_replacements to score candidates. Answer context_questions to tune a family's rules.",
)

# =============================================================================
# INPUT HELPERS
# =============================================================================


class ToolInputError(ValueError):
    """Bad tool arguments; the message is returned to the caller as-is."""


def _parse_json_param(value: Any, name: str, expected: type) -> Any:
    """Accept either a decoded value or a JSON string (some MCP clients stringify objects)."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            raise ToolInputError(f"{name} is not valid JSON") from None
    if not isinstance(value, expected):
        raise ToolInputError(f"{name} must be a JSON {'object' if expected is dict else 'array'}")
    return value


def _parse_product(value: Any, name: str = "product") -> PartAttributes:
    return map_product_to_attributes(_parse_json_param(value, name, dict))


def _parse_context(value: Any) -> dict[str, str]:
    if value is None:
        return {}
    answers = _parse_json_param(value, "context", dict)
    return {str(k): str(v)[:MAX_TEXT_LENGTH] for k, v in answers.items() if v is not None}


def _select_table(
    attrs: PartAttributes, family_id: str | None, context: dict[str, str]
) -> tuple[LogicTable, PartAttributes]:
    """Logic table for ``attrs`` (explicit family wins over classification), with context applied."""
    if family_id:
        table = get_logic_table(family_id)
        if table is None:
            raise ToolInputError(f"Unknown family_id '{family_id}'. Use list_families() to see supported families.")
        attrs = enrich_for_family(table.family_id, attrs)
    else:
        table, attrs = resolve_logic_table(attrs.part.subcategory, attrs)
        if table is None:
            raise ToolInputError(
                f"No logic table for subcategory '{attrs.part.subcategory}'. Pass family_id explicitly "
                f"or use list_families() to see supported families."
            )

    if context:
        config = get_context_config(table.family_id)
        if config is not None:
            table = apply_context(table, context, config)
        else:
            logger.debug(f"Family {table.family_id} has no context questions, ignoring context")
    return table, attrs


def _family_info(table: LogicTable) -> dict:
    return {
        "family_id": table.family_id,
        "family_name": table.family_name,
        "category": table.category,
        "description": table.description,
    }


# =============================================================================
# TOOLS
# =============================================================================


@mcp.tool(
    annotations=ToolAnnotations(
        title="Map Vendor Product",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def map_product(product: dict | str) -> dict:
    """Normalize a raw vendor product record into canonical part attributes.

    Args:
        product: Vendor product JSON (ManufacturerProductNumber, Manufacturer, Category, Parameters, ...)

    Returns:
        part: Identity and descriptive fields
        parameters: Normalized attributes (attribute_id, name, value, numeric_value in SI units)
        family: Resolved logic-table family, or null when the part's family is not supported
    """
    try:
        attrs = _parse_product(product)
        table, attrs = resolve_logic_table(attrs.part.subcategory, attrs)
        return {
            "part": to_dict(attrs.part),
            "parameters": to_dict(attrs.parameters),
            "family": _family_info(table) if table else None,
        }
    except ToolInputError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"map_product failed: {type(e).__name__}: {e}")
        return {"error": "Product mapping failed. Check server logs for details."}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Summarize Keyword Search",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def search_summary(response: dict | str) -> dict:
    """Reduce a vendor keyword-search response to a tagged none/single/multiple result.

    Args:
        response: Vendor keyword-search JSON with ExactMatches and Products lists

    Returns:
        type: "none", "single" or "multiple"
        matches: Part summaries, deduplicated by manufacturer part number
    """
    try:
        return to_dict(map_keyword_response(_parse_json_param(response, "response", dict)))
    except ToolInputError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"search_summary failed: {type(e).__name__}: {e}")
        return {"error": "Search summary failed. Check server logs for details."}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Evaluate Replacement Candidate",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def evaluate_candidate(
    source_product: dict | str,
    candidate_product: dict | str,
    family_id: str | None = None,
    context: dict | str | None = None,
) -> dict:
    """Score one candidate replacement against a source part, rule by rule.

    Args:
        source_product: Vendor product JSON of the part being replaced
        candidate_product: Vendor product JSON of the proposed replacement
        family_id: Logic-table family to use (e.g. "12", "C2"). Default: classify from the source part
        context: Application context answers, {question_id: option_value}. See context_questions()

    Returns:
        match_percentage: Weighted score 0-100
        passed: False if any rule hard-failed, regardless of score
        results: Per-rule verdicts (pass/fail/review/upgrade/info) with notes
        review_flags: Attribute ids that need engineering review
    """
    try:
        source = _parse_product(source_product, "source_product")
        candidate = _parse_product(candidate_product, "candidate_product")
        table, source = _select_table(source, family_id, _parse_context(context))
        candidate = enrich_for_family(table.family_id, candidate)
        result = evaluate(table, source, candidate)
        return {
            "family": _family_info(table),
            "source": to_dict(source.part),
            "candidate": to_dict(candidate.part),
            "match_percentage": result.match_percentage,
            "passed": result.passed,
            "results": to_dict(result.results),
            "review_flags": list(result.review_flags),
            "notes": list(result.notes),
        }
    except ToolInputError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"evaluate_candidate failed: {type(e).__name__}: {e}")
        return {"error": "Evaluation failed. Check server logs for details."}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Rank Replacement Candidates",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def find_replacements(
    source_product: dict | str,
    candidate_products: list | str,
    family_id: str | None = None,
    context: dict | str | None = None,
) -> dict:
    """Rank candidate replacements for a source part. Passing candidates come first, then by score.

    Args:
        source_product: Vendor product JSON of the part being replaced
        candidate_products: List of vendor product JSON records (max 200). The source part itself is skipped
        family_id: Logic-table family to use. Default: classify from the source part
        context: Application context answers, {question_id: option_value}

    Returns:
        recommendations: Ranked list with match_percentage, passed, match_details and summary notes
        total: Number of recommendations
    """
    try:
        raw_candidates = _parse_json_param(candidate_products, "candidate_products", list)
        if len(raw_candidates) > MAX_CANDIDATES:
            return {"error": f"Too many candidates (max {MAX_CANDIDATES})"}
        source = _parse_product(source_product, "source_product")
        table, source = _select_table(source, family_id, _parse_context(context))
        candidates = [
            enrich_for_family(table.family_id, _parse_product(c, "candidate_products[]"))
            for c in raw_candidates
        ]
        recommendations = _find_replacements(table, source, candidates)
        return {
            "family": _family_info(table),
            "source": to_dict(source.part),
            "recommendations": to_dict(recommendations),
            "total": len(recommendations),
        }
    except ToolInputError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"find_replacements failed: {type(e).__name__}: {e}")
        return {"error": "Ranking failed. Check server logs for details."}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Missing Attributes",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def missing_attributes(product: dict | str, family_id: str | None = None) -> dict:
    """List specifications the family's rules need but the part record lacks, most important first.

    Use before matching to decide which specs to ask the user for.

    Args:
        product: Vendor product JSON
        family_id: Logic-table family to use. Default: classify from the part

    Returns:
        missing: [{attribute_id, name, weight, logic_type}] sorted by weight descending
    """
    try:
        attrs = _parse_product(product)
        table, attrs = _select_table(attrs, family_id, {})
        missing = detect_missing_attributes(table, attrs)
        return {"family": _family_info(table), "missing": to_dict(missing), "total": len(missing)}
    except ToolInputError as e:
        return {"error": str(e)}
    except Exception as e:
        logger.error(f"missing_attributes failed: {type(e).__name__}: {e}")
        return {"error": "Missing attribute detection failed. Check server logs for details."}


@mcp.tool(
    annotations=ToolAnnotations(
        title="Context Questions",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def context_questions(family_id: str) -> dict:
    """Application-context questions for a family. Answers go in the `context` argument of the matching tools.

    Args:
        family_id: Logic-table family id (e.g. "12" for MLCC, "C2" for switching regulators)

    Returns:
        questions: [{question_id, question_text, priority, options: [{value, label, description}]}]
    """
    if len(family_id) > MAX_TEXT_LENGTH:
        return {"error": f"family_id too long (max {MAX_TEXT_LENGTH} characters)"}
    config = get_context_config(family_id)
    if config is None:
        return {"family_id": family_id, "questions": []}
    return {
        "family_id": family_id,
        "context_sensitivity": config.context_sensitivity,
        "questions": [
            {
                "question_id": q.question_id,
                "question_text": q.question_text,
                "priority": q.priority,
                "condition": to_dict(q.condition) if q.condition else None,
                "options": [{"value": o.value, "label": o.label, "description": o.description} for o in q.options],
            }
            for q in sorted(config.questions, key=lambda q: q.priority)
        ],
    }


@mcp.tool(
    annotations=ToolAnnotations(
        title="List Families",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def list_families() -> dict:
    """List supported component families and their rule counts."""
    families = [
        {
            **_family_info(table),
            "rule_count": len(table.rules),
            "has_context": get_context_config(table.family_id) is not None,
        }
        for table in _list_families()
    ]
    return {"families": families, "total": len(families)}


# =============================================================================
# APP
# =============================================================================


async def health(request):
    return JSONResponse({
        "status": "healthy",
        "service": "partxref-mcp",
        "version": __version__,
    })


def create_app():
    """Create the ASGI application."""
    app = mcp.http_app(
        path="/mcp",
        transport="streamable-http",
        stateless_http=True,
    )
    app.routes.append(Route("/health", health))
    return app


app = create_app()


class _HealthFilterLog(logging.Filter):
    """Drop /health access log lines from container healthchecks."""

    def filter(self, record: logging.LogRecord) -> bool:
        return "/health" not in record.getMessage()


def main():
    """Run the server."""
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("uvicorn.access").addFilter(_HealthFilterLog())
    logger.info(f"Starting partxref-mcp {__version__} on port {HTTP_PORT} ({len(_list_families())} families)")

    uvicorn.run(
        "partxref_mcp.server:app",
        host="0.0.0.0",
        port=HTTP_PORT,
        lifespan="on",
    )


if __name__ == "__main__":
    main()
