"""Single-page browser front-end served at /."""

PAGE_HTML = '''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>humansort</title>
    <style>
        * { margin: 0; padding: 0; box-sizing: border-box; }
        body {
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            background: #f4f5f7;
            color: #1d1f24;
        }
        .container { max-width: 640px; margin: 40px auto; padding: 0 20px; }
        h1 { font-size: 1.6rem; margin-bottom: 20px; }
        ul, ol { margin: 0 0 20px 24px; }
        li { padding: 6px 0; }
        button {
            padding: 6px 12px;
            margin: 2px 4px;
            border: 1px solid #c4c8d0;
            border-radius: 6px;
            background: #fff;
            cursor: pointer;
        }
        button:disabled { opacity: 0.5; cursor: default; }
        .choice { display: block; width: 100%; text-align: left; padding: 12px; font-size: 1rem; }
        input[type=text] { width: 100%; padding: 8px; margin-bottom: 16px; }
        .error { color: #b42318; margin-bottom: 12px; min-height: 1.2em; }
        .rating { color: #6b7280; font-size: 0.85rem; margin-left: 8px; }
    </style>
</head>
<body>
    <div class="container">
        <h1>humansort</h1>
        <div id="error" class="error"></div>
        <div id="view"></div>
    </div>
    <script>
        let state = null;
        let showAll = false;

        function el(tag, text, attrs) {
            const node = document.createElement(tag);
            if (text !== undefined && text !== null) node.textContent = text;
            Object.assign(node, attrs || {});
            return node;
        }

        function showError(message) {
            document.getElementById('error').textContent = message || '';
        }

        async function loadState() {
            const resp = await fetch('/api/state');
            state = await resp.json();
            render();
        }

        async function dispatch(action) {
            const resp = await fetch('/api/action', {
                method: 'POST',
                headers: {'Content-Type': 'application/json'},
                body: JSON.stringify(action),
            });
            const data = await resp.json();
            if (!resp.ok) {
                showError(data.error);
                return false;
            }
            showError('');
            state = data;
            render();
            return true;
        }

        function changeView(view) {
            return dispatch({type: 'change_view', new_view: view});
        }

        function renderInput(root) {
            const list = el('ul');
            for (const item of state.items) {
                const li = el('li', item.value + ' ');
                li.appendChild(el('button', 'edit', {onclick: () => {
                    const input = el('input', null, {type: 'text', value: item.value});
                    input.onkeypress = (e) => {
                        if (e.key === 'Enter') {
                            dispatch({type: 'rename_item', old_name: item.value, new_name: input.value});
                        }
                    };
                    li.replaceChildren(input);
                    input.focus();
                }}));
                li.appendChild(el('button', 'remove', {onclick: () => {
                    dispatch({type: 'remove_item', name: item.value});
                }}));
                list.appendChild(li);
            }
            root.appendChild(list);

            const add = el('input', null, {id: 'new-item', type: 'text', placeholder: 'Type a new item and press enter to add it'});
            add.onkeypress = async (e) => {
                if (e.key === 'Enter') {
                    if (await dispatch({type: 'add_item', name: add.value})) {
                        document.getElementById('new-item').focus();
                    }
                }
            };
            root.appendChild(add);

            const size = el('select');
            for (let n = 2; n <= 9; n++) {
                size.appendChild(el('option', String(n), {value: n, selected: n === state.batch_size}));
            }
            size.onchange = () => dispatch({type: 'set_batch_size', batch_size: Number(size.value)});
            const sizeLabel = el('div', 'Items per round: ');
            sizeLabel.appendChild(size);
            root.appendChild(sizeLabel);

            root.appendChild(el('button', 'Start sorting', {
                disabled: !state.can_sort,
                onclick: () => changeView('sorting'),
            }));
        }

        async function renderSorting(root) {
            const list = el('ol');
            root.appendChild(list);
            root.appendChild(el('button', 'Edit items', {onclick: () => changeView('input')}));
            root.appendChild(el('button', 'View sorted list', {onclick: () => changeView('output')}));

            const resp = await fetch('/api/batch');
            const data = await resp.json();
            if (!resp.ok) {
                showError(data.error);
                return;
            }
            data.batch.forEach((value, idx) => {
                const others = data.batch.filter((_, i) => i !== idx);
                const li = el('li');
                li.appendChild(el('button', value, {
                    className: 'choice',
                    onclick: () => dispatch({type: 'select_preference', winner: value, others: others}),
                }));
                list.appendChild(li);
            });
        }

        function renderOutput(root) {
            const limit = showAll ? state.items.length : Math.min(state.output_limit, state.items.length);
            const list = el('ol');
            for (const item of state.items.slice(0, limit)) {
                const li = el('li', item.value);
                li.appendChild(el('span', item.rating.toFixed(2), {className: 'rating'}));
                list.appendChild(li);
            }
            root.appendChild(list);

            if (state.items.length > state.output_limit) {
                root.appendChild(el('button', showAll ? 'Show fewer' : 'Show all', {onclick: () => {
                    showAll = !showAll;
                    render();
                }}));
            }
            const nav = el('div');
            nav.appendChild(el('button', 'Edit items', {onclick: () => changeView('input')}));
            nav.appendChild(el('button', 'Continue sorting', {
                disabled: !state.can_sort,
                onclick: () => changeView('sorting'),
            }));
            root.appendChild(nav);
        }

        function render() {
            const root = document.getElementById('view');
            root.replaceChildren();
            if (state.view === 'sorting') {
                renderSorting(root);
            } else if (state.view === 'output') {
                renderOutput(root);
            } else {
                renderInput(root);
            }
        }

        loadState();
    </script>
</body>
</html>'''
