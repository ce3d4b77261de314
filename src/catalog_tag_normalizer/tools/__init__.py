"""運用向けのコマンドラインツール."""
