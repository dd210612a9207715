"""
Gantt Generator Backend

Turns free-text project instructions into a validated Timeline. Each
layer communicates only through explicit contracts, never through
shared mutable state.

LAYER STRUCTURE:
================

1. CONTRACTS (contracts/)
   - Timeline model, phase palette, error taxonomy, ValidationResult
   - MUST NOT: import any other layer

2. INTERVALS (intervals/)
   - Responsibility: infer (unit, total_intervals) from free text,
     realign a Timeline with explicit durations
   - Outputs: IntervalEstimate, corrected Timeline
   - MUST NOT: raise on missing signals - the default tier applies

3. VALIDATION (validation/)
   - Responsibility: raw model text -> JSON object -> Timeline
   - Outputs: Timeline or a typed ExtractionError / SchemaError
   - MUST NOT: return partially validated data

4. ENGINE (engine.py)
   - Responsibility: one synchronous pipeline per request
   - Outputs: GenerationResult (timeline + markup, or typed error)

5. HOSTS (api/, cli.py)
   - Responsibility: HTTP and command-line surfaces, configuration

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: contract types are frozen; corrections are new instances
- Deterministic: classification, validation, reconciliation and rendering
  are pure functions of their inputs
- Explicit errors: every failure is a GenerationError subclass
- No retries, no caching, no persistence
"""
