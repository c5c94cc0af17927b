# relchart/categories.py
"""Static filter tables: model-type categories and model-size buckets.

Both tables are build-time configuration. Order matters:
  - CATEGORY_OPTIONS is scanned in order and the catch-all `other` entry is
    evaluated only after every defined category has failed.
  - SIZE_OPTIONS derives the lower bound of each "at-most" bucket from the
    previous "at-most" entry, so thresholds must stay ascending.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from .model import Category, SizeBucket

OTHER_CATEGORY = "other"

AT_MOST = "at-most"
ABOVE = "above"

CATEGORY_OPTIONS: Tuple[Category, ...] = (
    Category("lang", "语言", ("语言", "语言模型", "文本", "LLM", "language")),
    Category("multi", "多模态", ("多模态", "multimodal", "视频+图像+文本")),
    Category("img", "图像", ("图像生成", "文生图", "image")),
    Category("video", "视频", ("视频生成", "文生视频", "video")),
    Category("code", "代码", ("代码", "code", "编程")),
    Category("voice", "语音", ("语音生成", "语音", "音频")),
    Category("doc", "文档解析", ("文档", "OCR", "doc", "文档解析", "文档解析模型")),
    Category(OTHER_CATEGORY, "其他", ()),
)

SIZE_OPTIONS: Tuple[SizeBucket, ...] = (
    SizeBucket("≤3B", AT_MOST, 3),
    SizeBucket("≤7B", AT_MOST, 7),
    SizeBucket("≤32B", AT_MOST, 32),
    SizeBucket("≤72B", AT_MOST, 72),
    SizeBucket("≤120B", AT_MOST, 120),
    SizeBucket("≤400B", AT_MOST, 400),
    SizeBucket(">400B", ABOVE, 400),
)

CATEGORY_BY_KEY: Dict[str, Category] = {c.key: c for c in CATEGORY_OPTIONS}


def size_bucket_by_label(label: str) -> Optional[SizeBucket]:
    for b in SIZE_OPTIONS:
        if b.label == label:
            return b
    return None


def at_most_lower_bound(bucket: SizeBucket, options: Tuple[SizeBucket, ...] = SIZE_OPTIONS) -> float:
    """Threshold of the previous "at-most" bucket, or -inf for the first one.

    A bucket that is not in `options` has no predecessor and gets -inf.
    """
    idx = -1
    for i, b in enumerate(options):
        if b.kind == bucket.kind and b.threshold_b == bucket.threshold_b:
            idx = i
            break
    for i in range(idx - 1, -1, -1):
        if options[i].kind == AT_MOST:
            return float(options[i].threshold_b)
    return float("-inf")
