# relchart/render/inline_js.py
from __future__ import annotations

JS_CORE = r"""
const DATA = JSON.parse(document.getElementById('relchart-data').textContent || '{}');
const $ = (sel, root) => (root || document).querySelector(sel);
const $$ = (sel, root) => Array.from((root || document).querySelectorAll(sel));
"""

JS_PAN = r"""
(function initPan() {
  const chart = $('#release-chart');
  const inner = chart && $('.rc-inner', chart);
  if (!inner) return;
  const btnLeft = $('.pan-left', chart);
  const btnRight = $('.pan-right', chart);
  const vp = DATA.viewport || {};
  const pan = DATA.pan || {};
  const maxOffset = Math.max(0, vp.max_offset_px || 0);
  const clickStep = pan.click_step_px || 120;
  const holdSpeed = pan.hold_speed_px || 6;
  let offset = Math.max(0, Math.min(maxOffset, vp.pan_offset_px || 0));

  const apply = () => {
    inner.style.transform = `translateX(${-offset}px)`;
    if (maxOffset <= 0) {
      btnLeft.disabled = true;
      btnRight.disabled = true;
    } else {
      btnLeft.disabled = offset <= 1;
      btnRight.disabled = offset >= maxOffset - 1;
    }
  };
  const panBy = (dx) => {
    offset = Math.max(0, Math.min(maxOffset, offset + dx));
    apply();
  };

  btnLeft.addEventListener('click', () => panBy(-clickStep));
  btnRight.addEventListener('click', () => panBy(clickStep));

  const hold = (btn, dir) => {
    let raf = 0;
    let running = false;
    const step = () => {
      if (!running) return;
      panBy(dir * holdSpeed);
      raf = requestAnimationFrame(step);
    };
    const start = () => {
      if (running || maxOffset <= 0) return;
      running = true;
      raf = requestAnimationFrame(step);
    };
    const stop = () => {
      running = false;
      cancelAnimationFrame(raf);
    };
    btn.addEventListener('mousedown', start);
    btn.addEventListener('mouseup', stop);
    btn.addEventListener('mouseleave', stop);
    btn.addEventListener('touchstart', (e) => { e.preventDefault(); start(); }, { passive: false });
    btn.addEventListener('touchend', stop);
    btn.addEventListener('touchcancel', stop);
  };
  hold(btnLeft, -1);
  hold(btnRight, 1);

  chart.addEventListener('wheel', (e) => {
    if (maxOffset <= 0) return;
    const delta = Math.abs(e.deltaX) > Math.abs(e.deltaY) ? e.deltaX : e.deltaY;
    if (delta !== 0) {
      e.preventDefault();
      panBy(delta);
    }
  }, { passive: false });

  apply();
})();
"""

JS_LIST = r"""
function setActiveToc(id) {
  let active = null;
  $$('.custom-toc a').forEach((a) => {
    const on = a.getAttribute('data-target') === id;
    a.classList.toggle('active', on);
    if (on) active = a;
  });
  const box = $('.custom-toc-content');
  if (!box || !active) return;
  const top = active.offsetTop - box.scrollTop;
  if (top < 0 || top + active.offsetHeight > box.clientHeight) {
    box.scrollTo({ top: Math.max(0, active.offsetTop - box.clientHeight / 3), behavior: 'smooth' });
  }
}

function scrollToItem(id) {
  const el = document.getElementById(id);
  if (!el) return;
  el.scrollIntoView({ behavior: 'smooth', block: 'center' });
  setActiveToc(id);
}

$$('.custom-toc a, #release-chart svg a').forEach((a) => {
  a.addEventListener('click', (e) => {
    const id = a.getAttribute('data-target');
    if (!id) return;
    e.preventDefault();
    scrollToItem(id);
  });
});

let scrollQueued = false;
window.addEventListener('scroll', () => {
  if (scrollQueued) return;
  scrollQueued = true;
  requestAnimationFrame(() => {
    scrollQueued = false;
    const mid = window.scrollY + window.innerHeight / 2;
    const hit = $$('.timeline-item').find((it) => mid >= it.offsetTop && mid <= it.offsetTop + it.offsetHeight);
    if (hit) setActiveToc(hit.id);
  });
});

$$('.expand-btn').forEach((btn) => {
  btn.addEventListener('click', () => {
    const box = btn.closest('.timeline-text-container');
    const shortText = $('.text-short', box);
    const fullText = $('.text-full', box);
    const expanded = !fullText.hidden;
    fullText.hidden = expanded;
    shortText.hidden = !expanded;
    btn.textContent = expanded ? 'Show more' : 'Show less';
  });
});

const tocToggle = $('.toc-toggle');
if (tocToggle) {
  tocToggle.addEventListener('click', () => {
    const hidden = document.body.classList.toggle('toc-hidden');
    tocToggle.textContent = hidden ? 'Show contents' : 'Hide contents';
  });
}
"""

JS_BLOCK = "\n".join([JS_CORE, JS_PAN, JS_LIST])
