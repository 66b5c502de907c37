import logging
from bookkit.page.app import enhance_html, init_page
from bookkit.page.search import SearchBox
from bookkit.page.surface import Event, SoupSurface
from bookkit.page.timers import ManualScheduler

def test_init_page_builds_components():
    html = ('<html><head></head><body><nav id="sidebar"><a class="nav-link" href="/">Home</a></nav>'
            '<input id="search-input"><pre><code>x</code></pre></body></html>')
    surface = SoupSurface(html, viewport_width=600)
    page = init_page(surface)
    assert page.sidebar is not None
    assert page.sidebar.state().is_mobile
    assert len(surface.select(".code-copy-button")) == 1
    assert page.search.search_input is surface.by_id("search-input")

def test_init_page_without_sidebar():
    page = init_page(SoupSurface("<p>hi</p>"))
    assert page.sidebar is None

def test_search_logs_query(caplog):
    surface = SoupSurface('<input id="search-input">')
    search = SearchBox(surface).attach()
    with caplog.at_level(logging.INFO, logger="bookkit.page.search"):
        surface.dispatch(Event("input", target=surface.by_id("search-input"), value="graphs"))
    assert search.last_query == "graphs"
    assert "Search: graphs" in caplog.text

def test_search_without_input_is_noop():
    search = SearchBox(SoupSurface("<p></p>")).attach()
    assert search.search_input is None

def test_enhance_html():
    html, added = enhance_html('<pre><code class="language-sh">ls</code></pre>')
    assert added == 1
    assert "code-block-wrapper" in html
    assert "Shell" in html
    again, added_again = enhance_html(html)
    assert added_again == 0
    assert again.count("code-copy-button") == html.count("code-copy-button")

def test_manual_scheduler_order_and_cancel():
    scheduler = ManualScheduler()
    seen = []
    scheduler.call_later(2, seen.append, "late")
    scheduler.call_later(1, seen.append, "early")
    scheduler.call_later(1.5, seen.append, "cancelled").cancel()
    assert scheduler.pending() == 2
    assert scheduler.advance(3) == 2
    assert seen == ["early", "late"]
    assert scheduler.now == 3

def test_stop_propagation():
    surface = SoupSurface('<div id="outer"><span id="inner">x</span></div>')
    seen = []
    surface.add_listener(surface.by_id("inner"), "click", lambda e: (seen.append("inner"), e.stop_propagation()))
    surface.add_listener(surface.document, "click", lambda e: seen.append("document"))
    surface.dispatch(Event("click", target=surface.by_id("inner")))
    assert seen == ["inner"]

def test_init_page_with_custom_markup():
    from bookkit.page.sidebar import FULL_MARKUP, SidebarMarkup
    drawer = SidebarMarkup(name="drawer", sidebar=".drawer", overlay=".drawer-overlay", toggle=".menu-button",
                           links=".drawer a", first_link=".drawer a", subsections=".drawer-group")
    surface = SoupSurface('<aside class="drawer"><a href="/">Home</a></aside>')
    assert init_page(surface).sidebar is None
    page = init_page(SoupSurface('<aside class="drawer"><a href="/">Home</a></aside>'), (FULL_MARKUP, drawer))
    assert page.sidebar.markup is drawer
