# src/construct_mixins/core/__init__.py
"""
Core do construct-mixins.

Este pacote reúne o motor genérico de aplicação de mixins, independente
de qualquer domínio concreto de recursos.

Componentes principais:
    - tree         → nós da árvore, paths, metadados e nomes determinísticos
    - mixins       → contrato de mixin, seletores e applicator
    - traceability → registro de proveniência e relatório consolidado
    - config       → carregamento, merge e hashing de configuração

Princípios fundamentais:
    - O engine decide apenas *se* e *em que ordem* um mixin é aplicado
    - Aplicabilidade é verificada por capacidade (`supports`), não por tipo
    - Toda aplicação bem-sucedida deixa exatamente um registro no nó

Limites explícitos:
    - Não define mixins de domínio
    - Não sintetiza templates
    - Não depende de CLI ou serviços externos
"""
