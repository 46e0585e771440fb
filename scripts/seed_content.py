"""Seed sample plans and FAQ entries for local development.

Existing rows are left alone; run against an empty database.
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from unipet import create_app
from unipet.extensions import db
from unipet.models import FaqItem, Plan

PLANS = [
    {
        'name': 'Basic',
        'description': 'Cobertura essencial para consultas e vacinas.',
        'features': ['Consultas clínicas', 'Vacinas anuais', 'Atendimento 24h'],
        'price_normal': 5990,
        'price_with_copay': 3990,
        'display_order': 0,
    },
    {
        'name': 'Comfort',
        'description': 'Exames e cirurgias simples incluídos.',
        'features': ['Tudo do Basic', 'Exames laboratoriais', 'Cirurgias simples'],
        'price_normal': 9990,
        'price_with_copay': 6990,
        'is_popular': True,
        'display_order': 1,
    },
]

FAQ = [
    ('Existe carência?', 'Consultas têm carência de 30 dias.\nCirurgias, de 180 dias.'),
    ('Posso escolher a clínica?', 'Sim, qualquer unidade da rede credenciada.'),
]

app = create_app()

with app.app_context():
    if Plan.query.count() == 0:
        for values in PLANS:
            db.session.add(Plan().apply(values))
        print(f'Created {len(PLANS)} plans')
    else:
        print('Plans already present, skipping')

    if FaqItem.query.count() == 0:
        for order, (question, answer) in enumerate(FAQ):
            db.session.add(FaqItem(question=question, answer=answer, display_order=order))
        print(f'Created {len(FAQ)} FAQ items')
    else:
        print('FAQ already present, skipping')

    db.session.commit()
