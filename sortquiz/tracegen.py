# tracegen.py
#
# Plays quiz sessions with always-correct answers and exports the resulting
# SVL traces, one JSON object per line.
import json
import logging
import random
from pathlib import Path

from tqdm import tqdm

from sortquiz.config import QuizSettings, generate_random_array
from sortquiz.dispatcher import build_engine, resolve_algorithm
from sortquiz.ordering import OrderDirection
from sortquiz.validate import validate_svl

logger = logging.getLogger(__name__)


def autoplay(engine):
    """Drive an initialized engine to completion with its own expected actions."""
    outcomes = []
    while not engine.is_complete():
        outcomes.append(engine.submit_action(engine.expected_action()))
    return outcomes


def generate_trace(algorithm_id, values, order="asc", convergence=None):
    kind = resolve_algorithm(algorithm_id)
    settings = QuizSettings.from_mapping({"order": order, "convergence": convergence,
                                          "step_delay": 0, "select_delay": 0})
    engine = build_engine(kind, settings)
    engine.initialize(values, settings.order, settings.convergence_for(kind))
    autoplay(engine)
    return engine.to_svl()


def export_traces(output_file, algorithm_ids, count, settings: QuizSettings = None, seed=None):
    """
    Write `count` auto-played sessions per algorithm to `output_file` (JSONL).
    Returns the number of records written; traces failing schema validation are
    logged and skipped.
    """
    settings = settings or QuizSettings()
    rng = random.Random(seed)
    out_file = Path(output_file)
    out_file.parent.mkdir(parents=True, exist_ok=True)

    jobs = [(resolve_algorithm(a), k) for a in algorithm_ids for k in range(count)]
    written = 0
    with open(out_file, "w", encoding="utf-8") as fw:
        for kind, _ in tqdm(jobs, desc="Generating quiz traces"):
            values = generate_random_array(settings.size, rng)
            svl = generate_trace(kind, values, settings.order, settings.convergence)
            ok, reason = validate_svl(svl)
            if not ok:
                logger.error("Skipping invalid %s trace for %s: %s", kind.value, values, reason)
                continue
            record = {
                "algorithm_id": kind.value,
                "order": settings.order.value,
                "convergence": settings.convergence_for(kind).value,
                "input": values,
                "output": sorted(values, reverse=settings.order is OrderDirection.DESCENDING),
                "svl": svl,
            }
            fw.write(json.dumps(record, ensure_ascii=False) + "\n")
            written += 1

    logger.info("Wrote %d traces to %s", written, out_file)
    return written
