"""請求書フォームとPDF生成パッケージ"""
