"""Catalog request handlers.

- author_controller: Author list/detail/create/update/delete
- bookinstance_controller: BookInstance (copy) list/detail/create/update/delete
- catalog_controller: catalog home page
"""
