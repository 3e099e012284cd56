from __future__ import annotations

import html
import json


def render_homepage(app_name: str = "todo-api", rpc_prefix: str = "/rpc") -> str:
    return _PAGE.replace("__APP_NAME__", html.escape(app_name)).replace(
        "__RPC_PREFIX__", json.dumps(rpc_prefix.rstrip("/"))
    )


_PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Simple Todo</title>
  <meta name="application-name" content="__APP_NAME__">
  <link rel="preconnect" href="https://fonts.googleapis.com">
  <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
  <link
    href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&display=swap"
    rel="stylesheet"
  >
  <style>
    :root {
      --bg: #f9fafb;
      --panel: #ffffff;
      --ink: #111827;
      --muted: #6b7280;
      --faint: #9ca3af;
      --accent: #2563eb;
      --done: #16a34a;
      --line: #e5e7eb;
      --warn: #dc2626;
    }
    * { box-sizing: border-box; }
    body {
      margin: 0;
      min-height: 100vh;
      font-family: "Space Grotesk", sans-serif;
      color: var(--ink);
      background: var(--bg);
    }
    .wrap {
      max-width: 672px;
      margin: 0 auto;
      padding: 32px 16px;
    }
    .hero { text-align: center; margin-bottom: 32px; }
    .title { margin: 0 0 8px; font-size: 1.9rem; }
    .sub { margin: 0; color: var(--muted); }
    .card {
      background: var(--panel);
      border: 1px solid var(--line);
      border-radius: 12px;
      box-shadow: 0 1px 3px rgba(17, 24, 39, 0.06);
    }
    .composer { padding: 24px; margin-bottom: 32px; }
    .composer form { display: flex; gap: 12px; }
    .composer input {
      flex: 1;
      border: 1px solid var(--line);
      border-radius: 8px;
      padding: 10px 12px;
      font: inherit;
    }
    button {
      border: none;
      border-radius: 8px;
      padding: 10px 18px;
      font: inherit;
      font-weight: 700;
      cursor: pointer;
    }
    button:disabled { opacity: 0.5; cursor: not-allowed; }
    .primary { background: var(--ink); color: #fff; }
    .ghost { background: transparent; color: var(--faint); padding: 8px; }
    .ghost:hover:not(:disabled) { color: var(--warn); }
    .group h2 {
      display: flex;
      align-items: center;
      gap: 8px;
      font-size: 1.1rem;
      font-weight: 500;
      margin: 0 0 16px;
    }
    .dot { width: 12px; height: 12px; border-radius: 999px; border: 2px solid var(--accent); }
    .dot.done { background: var(--done); border-color: var(--done); }
    .items { display: grid; gap: 8px; }
    .item { display: flex; align-items: center; gap: 12px; padding: 16px; }
    .item.completed { background: var(--bg); }
    .item .body { flex: 1; min-width: 0; }
    .item h3 { margin: 0; font-size: 1rem; font-weight: 500; }
    .item.completed h3 { color: var(--muted); text-decoration: line-through; }
    .item .desc { margin: 4px 0 0; font-size: 0.875rem; color: var(--muted); }
    .item .meta { margin: 8px 0 0; font-size: 0.75rem; color: var(--faint); }
    hr { border: none; border-top: 1px solid var(--line); margin: 32px 0; }
    .empty { text-align: center; padding: 48px 0; color: var(--faint); }
    .empty .big { font-size: 1.1rem; margin: 0 0 4px; }
    .empty .small { font-size: 0.875rem; margin: 0; }
    .stats { margin-top: 32px; text-align: center; font-size: 0.875rem; color: var(--muted); }
    [hidden] { display: none !important; }
  </style>
</head>
<body>
  <main class="wrap">
    <section class="hero">
      <h1 class="title">Simple Todo</h1>
      <p class="sub">Stay organized and get things done</p>
    </section>

    <section class="card composer">
      <form id="createForm">
        <input id="titleInput" placeholder="What needs to be done?" autocomplete="off">
        <button class="primary" id="createBtn" type="submit" disabled>Add</button>
      </form>
    </section>

    <p class="empty" id="loadingText">Loading tasks...</p>
    <section id="taskGroups" hidden>
      <div class="group" id="todoGroup" hidden>
        <h2><span class="dot"></span><span id="todoHeading">To Do (0)</span></h2>
        <div class="items" id="todoList"></div>
      </div>
      <hr id="groupSeparator" hidden>
      <div class="group" id="doneGroup" hidden>
        <h2><span class="dot done"></span><span id="doneHeading">Completed (0)</span></h2>
        <div class="items" id="doneList"></div>
      </div>
      <div class="empty" id="emptyState" hidden>
        <p class="big">No tasks yet!</p>
        <p class="small">Add a task above to get started</p>
      </div>
    </section>
    <p class="stats" id="statsText" hidden></p>
  </main>

  <script>
    const RPC_PREFIX = __RPC_PREFIX__;

    // phase: "loading" until the first getTasks settles, then "idle".
    const state = {
      phase: "loading",
      tasks: [],
      creating: false,
      pending: new Set(),
    };

    const titleInput = document.getElementById("titleInput");
    const createBtn = document.getElementById("createBtn");

    async function rpc(procedure, input) {
      const options = input === undefined
        ? { method: "GET" }
        : {
            method: "POST",
            headers: { "Content-Type": "application/json" },
            body: JSON.stringify(input),
          };
      const response = await fetch(`${RPC_PREFIX}/${procedure}`, options);
      const data = await response.json();
      if (!response.ok) {
        throw new Error(JSON.stringify(data.error || data));
      }
      return data;
    }

    function actionKey(action, taskId) {
      return `${action}:${taskId}`;
    }

    function isBusy(taskId) {
      return state.pending.has(actionKey("toggle", taskId))
        || state.pending.has(actionKey("delete", taskId));
    }

    function renderTask(task) {
      const card = document.createElement("div");
      card.className = task.completed ? "card item completed" : "card item";

      const checkbox = document.createElement("input");
      checkbox.type = "checkbox";
      checkbox.checked = task.completed;
      checkbox.disabled = isBusy(task.id);
      checkbox.addEventListener("change", () => toggleTask(task.id, checkbox.checked));

      const body = document.createElement("div");
      body.className = "body";
      const heading = document.createElement("h3");
      heading.textContent = task.title;
      body.appendChild(heading);
      if (task.description) {
        const desc = document.createElement("p");
        desc.className = "desc";
        desc.textContent = task.description;
        body.appendChild(desc);
      }
      const meta = document.createElement("p");
      meta.className = "meta";
      meta.textContent = `Created ${new Date(task.created_at).toLocaleDateString()}`;
      body.appendChild(meta);

      const removeBtn = document.createElement("button");
      removeBtn.className = "ghost";
      removeBtn.type = "button";
      removeBtn.title = "Delete task";
      removeBtn.textContent = "\\u2715";
      removeBtn.disabled = isBusy(task.id);
      removeBtn.addEventListener("click", () => deleteTask(task.id));

      card.append(checkbox, body, removeBtn);
      return card;
    }

    function render() {
      const title = titleInput.value.trim();
      titleInput.disabled = state.creating;
      createBtn.disabled = state.creating || !title;
      createBtn.textContent = state.creating ? "..." : "Add";

      document.getElementById("loadingText").hidden = state.phase !== "loading";
      document.getElementById("taskGroups").hidden = state.phase === "loading";

      const todo = state.tasks.filter((task) => !task.completed);
      const done = state.tasks.filter((task) => task.completed);

      document.getElementById("todoGroup").hidden = todo.length === 0;
      document.getElementById("todoHeading").textContent = `To Do (${todo.length})`;
      document.getElementById("todoList").replaceChildren(...todo.map(renderTask));

      document.getElementById("groupSeparator").hidden = !(todo.length && done.length);

      document.getElementById("doneGroup").hidden = done.length === 0;
      document.getElementById("doneHeading").textContent = `Completed (${done.length})`;
      document.getElementById("doneList").replaceChildren(...done.map(renderTask));

      document.getElementById("emptyState").hidden = state.tasks.length !== 0;

      const stats = document.getElementById("statsText");
      stats.hidden = state.phase === "loading" || state.tasks.length === 0;
      stats.textContent = `${done.length} of ${state.tasks.length} tasks completed`;
    }

    async function loadTasks() {
      try {
        state.tasks = await rpc("getTasks");
      } catch (err) {
        console.error("Failed to load tasks:", err);
      } finally {
        state.phase = "idle";
        render();
      }
    }

    async function createTask(event) {
      event.preventDefault();
      const title = titleInput.value.trim();
      if (!title || state.creating) {
        return;
      }
      state.creating = true;
      render();
      try {
        const task = await rpc("createTask", { title, description: null });
        state.tasks = [...state.tasks, task];
        titleInput.value = "";
      } catch (err) {
        console.error("Failed to create task:", err);
      } finally {
        state.creating = false;
        render();
      }
    }

    async function toggleTask(taskId, completed) {
      const key = actionKey("toggle", taskId);
      if (state.pending.has(key)) {
        return;
      }
      state.pending.add(key);
      render();
      try {
        const updated = await rpc("toggleTask", { id: taskId, completed });
        state.tasks = state.tasks.map((task) =>
          task.id === taskId ? { ...task, completed: updated.completed } : task
        );
      } catch (err) {
        console.error("Failed to toggle task:", err);
      } finally {
        state.pending.delete(key);
        render();
      }
    }

    async function deleteTask(taskId) {
      const key = actionKey("delete", taskId);
      if (state.pending.has(key)) {
        return;
      }
      state.pending.add(key);
      render();
      try {
        const result = await rpc("deleteTask", { id: taskId });
        if (result.success) {
          state.tasks = state.tasks.filter((task) => task.id !== taskId);
        }
      } catch (err) {
        console.error("Failed to delete task:", err);
      } finally {
        state.pending.delete(key);
        render();
      }
    }

    document.getElementById("createForm").addEventListener("submit", createTask);
    titleInput.addEventListener("input", render);

    render();
    loadTasks();
  </script>
</body>
</html>
"""
