"""
API routes for Furnilyzer.
"""
from typing import Any, Dict, List, Optional

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..schemas import AnalyzeRequest, BatchAnalyzeRequest, BatchItemError
from ..services import FurnitureAnalyzer
from ..logger import get_logger

logger = get_logger(__name__)

# Create blueprint
api_bp = Blueprint('api', __name__, url_prefix='/api')

ANALYZER_EXTENSION = 'furnilyzer.analyzer'


def get_analyzer() -> Optional[FurnitureAnalyzer]:
    """Analyzer registered on the current app (None while unavailable)."""
    return current_app.extensions.get(ANALYZER_EXTENSION)


def _unavailable():
    return jsonify({
        'error': 'Analyzer service not initialized yet. Please try again later.'
    }), 503


def _invalid(e: ValidationError, message: str):
    return jsonify({
        'error': message,
        'details': str(e),
    }), 400


@api_bp.route('/analyze', methods=['POST'])
def analyze():
    """
    Analyze one furniture search query.

    Expected JSON:
    {
        "text": "grey chesterfield sofa with elevated arms"
    }

    Returns:
    {
        "productType": "Sofa",
        "brandName": null,
        "productName": null,
        "features": ["Elevated Arms"],
        "styles": [],
        "places": [],
        "originalText": "...",
        "confidence": 0.93
    }
    """
    try:
        payload = AnalyzeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _invalid(e, 'Missing required parameter: text')

    analyzer = get_analyzer()
    if analyzer is None:
        return _unavailable()

    try:
        result = analyzer.analyze(payload.text)
        logger.info(
            f"Analyzed '{payload.text}': type={result.product_type}, "
            f"features={len(result.features)}, confidence={result.confidence:.2f}"
        )
        return jsonify(result.to_dict())

    except Exception as e:
        logger.error(f"Error analyzing text: {e}", exc_info=True)
        return jsonify({
            'error': 'Failed to analyze text',
            'details': str(e),
        }), 500


@api_bp.route('/analyze/batch', methods=['POST'])
def analyze_batch():
    """
    Analyze several queries in one request.

    Expected JSON:
    {
        "texts": ["velvet sofa", "bolzan armchir"]
    }

    Returns a JSON array with one result per item. Items that cannot be
    analyzed become {"error", "text", "details"} records.
    """
    try:
        payload = BatchAnalyzeRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _invalid(e, 'Missing or invalid parameter: texts must be an array')

    analyzer = get_analyzer()
    if analyzer is None:
        return _unavailable()

    try:
        results: List[Dict[str, Any]] = []
        for text in payload.texts:
            if not isinstance(text, str):
                results.append(BatchItemError(
                    error='Failed to analyze text',
                    text=text,
                    details='text must be a string',
                ).model_dump())
                continue

            try:
                results.append(analyzer.analyze(text).to_dict())
            except Exception as e:
                logger.warning(f"Batch item failed for '{text}': {e}")
                results.append(BatchItemError(
                    error='Failed to analyze text',
                    text=text,
                    details=str(e),
                ).model_dump())

        logger.info(f"Batch analysis complete: {len(results)} items")
        return jsonify(results)

    except Exception as e:
        logger.error(f"Error processing batch analysis: {e}", exc_info=True)
        return jsonify({
            'error': 'Failed to process batch analysis',
            'details': str(e),
        }), 500
