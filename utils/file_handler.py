import logging
import random
from pathlib import Path
from typing import Optional, Sequence, Tuple

from app.errors import CorpusError

log = logging.getLogger(__name__)

PASSAGES: Tuple[str, ...] = (
    "Considerations of a higher order, together with a rising level of civic "
    "awareness, keep the positions taken by participants relevant to the tasks "
    "at hand. The task of organization, and social and economic development in "
    "particular, requires us to analyze a training system that meets our most "
    "pressing needs!",
    "We are forced to start from the fact that the innovative path we have "
    "chosen plays an important role in shaping the clustering of efforts. By "
    "the way, shareholders of the largest companies shed light on extremely "
    "interesting features of the picture as a whole, yet the specific "
    "conclusions have, of course, been verified in good time.",
    "The significance of these problems is so obvious that the cohesion of a "
    "team of professionals plays an important role in shaping the development "
    "model. On the other hand, carrying out the planned targets makes it "
    "possible to complete important work on progressive lines of development.",
)


def _load_blocks(path: Path) -> Tuple[str, ...]:
    try:
        txt = path.read_text(encoding="utf-8").strip().replace("\r\n", "\n")
    except OSError as e:
        raise CorpusError(f"Cannot read passages from {path}: {e}") from e
    blocks = [b for b in txt.split("\n\n") if b.strip()]
    # a passage is typed as one line, so wrapped lines inside a block are joined
    return tuple(" ".join(line.strip() for line in b.splitlines() if line.strip()) for b in blocks)


def validate_passages(passages: Sequence[str]) -> Tuple[str, ...]:
    if not passages:
        raise CorpusError("Passage corpus is empty")
    for i, text in enumerate(passages):
        if not isinstance(text, str) or not text:
            raise CorpusError(f"Passage #{i} is empty or not text")
        bad = [ch for ch in text if not ch.isprintable()]
        if bad:
            raise CorpusError(f"Passage #{i} contains untypeable characters: {bad[:3]!r}")
    return tuple(passages)


def load_passages(path: Optional[str] = None) -> Tuple[str, ...]:
    """Built-in passages, or blank-line separated blocks from a text file."""
    if path is None:
        return validate_passages(PASSAGES)
    passages = validate_passages(_load_blocks(Path(path)))
    log.info("Loaded %d passages from %s", len(passages), path)
    return passages


def pick_passage(passages: Sequence[str], rng: Optional[random.Random] = None) -> Tuple[int, str]:
    if not passages:
        raise CorpusError("Passage corpus is empty")
    chooser = rng or random
    idx = chooser.randrange(len(passages))
    return idx, passages[idx]
