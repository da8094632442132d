from ticket_parser.loader import load_document_text

def test_html_is_read_verbatim(tmp_path):
    p = tmp_path / "t.html"
    p.write_text("<strong>ICN TO CEB</strong>&nbsp;", encoding="utf-8")
    text, err = load_document_text(str(p))
    assert err is None
    assert text == "<strong>ICN TO CEB</strong>&nbsp;"

def test_broken_pdf_reports_error(tmp_path):
    p = tmp_path / "broken.pdf"
    p.write_bytes(b"this is not a pdf")
    text, err = load_document_text(str(p))
    assert text == ""
    assert err

def test_missing_text_file_reports_error(tmp_path):
    text, err = load_document_text(str(tmp_path / "missing.txt"))
    assert text == ""
    assert err.startswith("read_error")
