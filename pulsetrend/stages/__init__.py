"""
Pipeline stages for PulseTrend.

Stages run strictly in sequence, each consuming the previous output:
- Record Loader & Validator
- Imputer
- Timestamp Disambiguator
- Resampler
- Dual-Band Filter
- Statistics Engine (consumes cleaned, not resampled, records)
"""
