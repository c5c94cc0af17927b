# relchart/render/inline_css.py
from __future__ import annotations

CSS_BASE = r"""
:root {
  --bg: #f5f8fb;
  --panel: #ffffff;
  --ink: #1f2d3d;
  --muted: #6b7f95;
  --accent: #2f6bd8;
  --line: rgba(86, 152, 195, 0.45);
  --chip: #e8f0fb;
}
* { box-sizing: border-box; }
body {
  margin: 0;
  padding: 0 16px 48px;
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, "Helvetica Neue", Arial, sans-serif;
  background: var(--bg);
  color: var(--ink);
}
h1 { font-size: 22px; margin: 20px 0 12px; }
.load-error {
  text-align: center;
  padding: 40px;
  background: #f8d7da;
  border: 1px solid #f5c6cb;
  border-radius: 8px;
  margin: 20px 0;
  color: #721c24;
}
"""

CSS_FILTERS = r"""
.filter-bar { display: flex; flex-wrap: wrap; gap: 10px; align-items: center; margin: 0 0 12px; }
.filter-bar input[type=search] { padding: 6px 10px; border: 1px solid #c9d6e6; border-radius: 6px; min-width: 220px; }
.type-chips { display: flex; flex-wrap: wrap; gap: 6px; }
.type-chip { padding: 3px 10px; border-radius: 999px; background: var(--chip); font-size: 12px; color: #3c6a93; }
.type-chip.active { background: var(--accent); color: #fff; }
.type-chip .count { opacity: 0.7; margin-left: 4px; }
.size-select { padding: 5px 8px; border-radius: 6px; border: 1px solid #c9d6e6; }
.filter-summary { font-size: 12px; color: var(--muted); }
"""

CSS_CHART = r"""
.release-chart-wrapper { max-width: 100%; margin: 0 auto 18px; }
#release-chart {
  position: relative;
  overflow: hidden;
  max-width: 100%;
  background: var(--panel);
  border: 1px solid #dbe6f2;
  border-radius: 10px;
}
#release-chart .rc-inner { position: absolute; top: 0; bottom: 0; will-change: transform; }
#release-chart svg { display: block; }
#release-chart svg a { cursor: pointer; }
#release-chart .empty {
  position: absolute; inset: 0; display: flex; align-items: center; justify-content: center;
  color: #8aa3c0; font-size: 12px;
}
.pan-btn {
  position: absolute; top: 0; bottom: 0; width: 42px; z-index: 2;
  border: none; background: rgba(255, 255, 255, 0.92); color: #3c6a93;
  font-size: 26px; cursor: pointer;
}
.pan-btn:disabled { color: #c3d2e3; cursor: default; }
.pan-left { left: 0; border-right: 1px solid #e3ecf5; }
.pan-right { right: 0; border-left: 1px solid #e3ecf5; }
"""

CSS_LIST = r"""
.custom-toc {
  position: fixed; top: 20px; left: 16px; width: 260px; max-height: calc(100vh - 40px);
  display: flex; flex-direction: column;
  background: var(--panel); border: 1px solid #dbe6f2; border-radius: 10px; z-index: 5;
}
.custom-toc-header { padding: 10px 12px; font-weight: 600; border-bottom: 1px solid #e3ecf5; }
.custom-toc-content { overflow-y: auto; padding: 6px 0; }
.custom-toc ul { list-style: none; margin: 0; padding: 0; }
.custom-toc a { display: block; padding: 4px 12px; font-size: 13px; color: var(--ink); text-decoration: none; }
.custom-toc a.active { background: var(--chip); color: var(--accent); }
body.toc-hidden .custom-toc { display: none; }
.toc-toggle { position: fixed; top: 20px; right: 16px; z-index: 6; }
.timeline-item { display: flex; gap: 12px; margin: 0 0 16px; }
.timeline-dot { width: 10px; height: 10px; margin-top: 8px; border-radius: 50%; background: var(--accent); flex: none; }
.timeline-content { flex: 1; background: var(--panel); border: 1px solid #dbe6f2; border-radius: 10px; padding: 12px 16px; }
.timeline-title { margin: 0 0 4px; font-size: 17px; }
.timeline-date { color: var(--muted); font-size: 12px; margin-bottom: 8px; }
.timeline-text p { margin: 0 0 8px; }
.text-full[hidden], .text-short[hidden] { display: none; }
.expand-btn { border: none; background: none; color: var(--accent); cursor: pointer; padding: 0; }
.timeline-evaluation { margin-top: 8px; padding: 8px 10px; background: #f3f7fc; border-radius: 6px; }
.timeline-evaluation-label { font-weight: 600; font-size: 12px; color: var(--muted); }
.timeline-details ul { margin: 8px 0 0; padding-left: 18px; font-size: 13px; }
.timeline-link { display: inline-block; margin-top: 8px; font-size: 13px; }
.badge { font-size: 11px; padding: 1px 6px; border-radius: 4px; margin-left: 6px; vertical-align: middle; }
.badge-open { background: #dff3e4; color: #1e7a3a; }
.badge-closed { background: #f1e3e3; color: #8a2b2b; }
"""

CSS_BLOCK = "\n".join([CSS_BASE, CSS_FILTERS, CSS_CHART, CSS_LIST])
