"""Chatwork bot that runs Lighthouse audits for requested URLs."""
