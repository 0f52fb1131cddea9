"""
Services layer for the Writing Assistant.

MODULES:
- ai/: provider registry, model catalog, classifier, key resolver,
  provider adapters and the dispatch gateway

STANDALONE SERVICES:
- suggestions: analysis prompt, suggestion parsing and applying

ARCHITECTURE:
1. Dispatch: ai.AIGateway → classify model → resolve key → adapter.complete()
2. Suggestions: SuggestService → prompt → gateway → parse_suggestions()
3. Editing: apply_suggestions() → span edits against the source snapshot
"""
