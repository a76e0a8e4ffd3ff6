"""
strategy/report.py - Human-readable and structured rendering of a Decision.
"""

from core.constants import Classification
from core.format_money import format_pct, format_signed, format_usd
from core.logging import ContextAdapter
from core.models import Decision

RESULTS_BANNER = "=" * 20 + " RESULTS " + "=" * 20
SEPARATOR = "=" * 60


def render_decision(decision: Decision) -> list[str]:
    """
    Render a Decision as console lines.

    Example:
        ==================== RESULTS ====================
        [+] Solana->BSC: +40.00 USD
        [-] BSC->Solana: -3.20 USD

        PROFITABLE ARBITRAGE DETECTED
        Best Strategy: Solana->BSC
        Expected Profit: $40.00 USD
        ROI: 8.00%
    """
    lines = [RESULTS_BANNER]

    for result in decision.results:
        if result.outcome is None:
            reason = f" ({result.error_code.value})" if result.error_code else ""
            lines.append(f"[x] {result.direction}: Failed to calculate{reason}")
            continue
        marker = "[+]" if result.outcome.profit > 0 else "[-]"
        lines.append(f"{marker} {result.direction}: {format_signed(result.outcome.profit)} USD")

    lines.append("")
    best = decision.best

    if decision.classification == Classification.QUALIFYING:
        lines.extend([
            "PROFITABLE ARBITRAGE DETECTED",
            f"Best Strategy: {best.path}",
            f"Expected Profit: {format_usd(best.profit)} USD",
            f"ROI: {format_pct(best.roi_pct)}",
        ])
    elif decision.classification == Classification.MARGINAL:
        lines.append(
            f"Small opportunity: {best.path} -> {format_usd(best.profit)} "
            f"(below {format_usd(decision.threshold)})"
        )
    else:
        lines.append("No profitable opportunities")

    lines.append(SEPARATOR)
    return lines


def log_decision(logger: ContextAdapter, decision: Decision) -> None:
    """
    Emit the Decision as one structured record.

    Qualifying opportunities are logged at WARNING so they stand out.
    """
    context = decision.to_dict()
    if decision.best is not None:
        context["roi_pct"] = str(decision.best.roi_pct)

    if decision.classification == Classification.QUALIFYING:
        logger.warning(
            f"Profitable arbitrage: {decision.best.path} {format_usd(decision.best.profit)}",
            extra={"context": context},
        )
    elif decision.classification == Classification.MARGINAL:
        logger.info(
            f"Small opportunity: {decision.best.path} {format_usd(decision.best.profit)}",
            extra={"context": context},
        )
    else:
        logger.info("No profitable opportunities", extra={"context": context})
