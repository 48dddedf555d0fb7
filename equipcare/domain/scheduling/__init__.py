"""
Scheduling domain - Service schedule generation and reconciliation

- generator.py   Contract terms -> ordered service occurrences (pure)
- reconciler.py  Merge occurrences with stored service records, plan/apply regeneration
- repository.py  Service record store
- service.py     Schedule view, completion toggle, notes, regeneration
- router.py      /contracts/{id}/schedule endpoints
"""
