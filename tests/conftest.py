import json
import pytest

def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")

@pytest.fixture
def book_root(tmp_path):
    write(tmp_path / "book-config.json", json.dumps({"output": {"directory": "out"}, "book": {"title": "T"}}))
    write(tmp_path / "docs/_config.yml", "title: Book\n")
    write(tmp_path / "docs/Gemfile", "source 'https://rubygems.org'\n")
    write(tmp_path / "docs/.nojekyll", "")
    write(tmp_path / "docs/_data/navigation.yml", "- title: Intro\n")
    write(tmp_path / "docs/assets/css/main.css", "body {}\n")
    write(tmp_path / "docs/_layouts/default.html", "<html>{{ content }}</html>\n")
    write(tmp_path / "src/index.md", "Hello")
    write(tmp_path / "src/introduction/preface.md", "Preface")
    write(tmp_path / "src/chapters/ch1.md", "Chapter 1")
    write(tmp_path / "src/chapters/notes.txt", "not content")
    write(tmp_path / "src/chapters/02-basics/index.md", "Basics")
    write(tmp_path / "src/chapters/02-basics/extra.md", "ignored")
    write(tmp_path / "src/chapters/02-basics/deep/index.md", "too deep")
    write(tmp_path / "src/chapters/03-empty/draft.md", "draft")
    write(tmp_path / "src/appendices/a.md", "Appendix A")
    return tmp_path
