"""
Portfolio CMS modules: dashboard, hero, collections and the public site.
"""
