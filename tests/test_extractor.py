"""Extraction engine unit tests."""
from converter.extractor import NO_CONTENT, UNTITLED, ExtractedContent, extract_content


class TestExtractContent:
    """Tests for extract_content."""

    def test_main_paragraph_without_noise(self):
        """Script and nav content never reaches the text."""
        html = """
        <html><body>
            <main>
                <script>trackVisitor();</script>
                <nav>Menu Link</nav>
                <p>Hello</p>
            </main>
        </body></html>
        """
        result = extract_content(html)
        assert "Hello" in result.text
        assert "trackVisitor" not in result.text
        assert "Menu Link" not in result.text

    def test_sample_page(self, sample_html):
        """Full page keeps main content and drops everything around it."""
        result = extract_content(sample_html)

        assert result.title == "Sample Page"
        assert "First paragraph of the article." in result.text
        assert "• Point one" in result.text
        assert "• Point two" in result.text
        for noise in ("password123", "We use cookies", "Buy now", "Copyright", "Site Banner", "Home"):
            assert noise not in result.text

    def test_headings_surrounded_by_blank_lines(self):
        """Headings sit between blank lines, paragraphs on their own line."""
        html = "<main><h2>Section</h2><p>Body text.</p></main>"
        result = extract_content(html)
        assert result.text == "Section\n\nBody text."

    def test_whitespace_normalized(self, sample_html):
        """Runs of whitespace inside elements collapse to one space."""
        result = extract_content(sample_html)
        assert "Second paragraph spread over lines." in result.text

    def test_no_triple_newlines(self):
        """Three or more newlines collapse to two."""
        html = "<main><h1>A</h1><h2>B</h2><p>C</p><p>D</p><ul><li>E</li></ul></main>"
        result = extract_content(html)
        assert "\n\n\n" not in result.text
        assert result.text == result.text.strip()

    def test_inline_text_flows(self):
        """Bare text nodes join with single spaces."""
        html = "<main><div>Alpha <span>Beta</span></div></main>"
        result = extract_content(html)
        assert result.text == "Alpha Beta"

    def test_article_preferred_over_body(self):
        """Without a main landmark the article is the content root."""
        html = """
        <html><body>
            <div class="sidebar">Sidebar text</div>
            <article><p>Article body</p></article>
        </body></html>
        """
        result = extract_content(html)
        assert result.text == "Article body"

    def test_main_preferred_over_article(self):
        """The main landmark wins over an article elsewhere on the page."""
        html = """
        <body>
            <article><p>Teaser</p></article>
            <main><p>Main body</p></main>
        </body>
        """
        assert extract_content(html).text == "Main body"

    def test_content_container_fallback(self):
        """An explicit content container is used before the body."""
        html = '<body><div>Outside</div><div id="content"><p>Inside</p></div></body>'
        assert extract_content(html).text == "Inside"

    def test_body_fallback(self):
        """Body is used when no landmark or container exists."""
        html = "<html><body><div><p>Only text</p></div></body></html>"
        assert extract_content(html).text == "Only text"

    def test_title_falls_back_to_h1(self):
        """First h1 is the title when there is no title tag."""
        html = "<body><h1>Heading Title</h1><p>Text</p></body>"
        assert extract_content(html).title == "Heading Title"

    def test_title_placeholder(self):
        """Placeholder title when neither title nor h1 exists."""
        html = "<body><p>Text</p></body>"
        assert extract_content(html).title == UNTITLED

    def test_empty_document_returns_sentinels(self):
        """Missing content yields sentinel values instead of an error."""
        result = extract_content("<html><body></body></html>")
        assert isinstance(result, ExtractedContent)
        assert result.title == UNTITLED
        assert result.text == NO_CONTENT

    def test_comments_ignored(self):
        """HTML comments are not part of the text."""
        html = "<main><!-- hidden note --><p>Visible</p></main>"
        assert extract_content(html).text == "Visible"

    def test_control_characters_removed(self):
        """Characters that cannot appear in documents are dropped."""
        html = "<main><p>Bad\x07char</p></main>"
        assert extract_content(html).text == "Badchar"

    def test_state_class_on_body_keeps_content(self):
        """A modal state class on body does not remove the page."""
        html = '<body class="modal-open"><nav>menu</nav><main><p>Hello</p></main></body>'
        assert extract_content(html).text == "Hello"

    def test_state_class_on_html_keeps_content(self):
        html = (
            '<html class="cookie-consent-active"><body>'
            '<main><p>Hello</p></main>'
            '<div class="cookie-banner">Accept cookies</div>'
            '</body></html>'
        )
        assert extract_content(html).text == "Hello"

    def test_wrapper_around_content_root_is_kept(self):
        """Layout wrappers that enclose main survive, noise inside main does not."""
        html = """
        <body>
            <div class="page shared-layout">
                <main>
                    <p>Hello</p>
                    <div class="share-buttons">Share this</div>
                </main>
            </div>
        </body>
        """
        result = extract_content(html)
        assert result.text == "Hello"
        assert "Share this" not in result.text
