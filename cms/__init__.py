"""CMS 데이터 접근 계층 패키지.

CMS data-access layer package.
Typed repositories for users, posts, pages, categories and tags.
"""
